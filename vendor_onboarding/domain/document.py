"""SQLAlchemy ORM model for vendor documents stored in object storage."""

from __future__ import annotations

import enum

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from vendor_onboarding.db.base import Base
from vendor_onboarding.domain.mixins import CreatedAtMixin, UUIDPrimaryKeyMixin, VendorOwnedMixin


class DocumentType(str, enum.Enum):
    CANCELLED_CHEQUE = "cancelled_cheque"
    PAN_CARD = "pan_card"
    GST = "gst"
    OTHER = "other"


class VendorDocument(Base, UUIDPrimaryKeyMixin, VendorOwnedMixin, CreatedAtMixin):
    __tablename__ = "vendor_documents"

    # Stored as VARCHAR + CHECK so the closed set holds on every backend
    document_type: Mapped[DocumentType] = mapped_column(
        Enum(
            DocumentType,
            name="vendor_document_type",
            native_enum=False,
            create_constraint=True,
            values_callable=lambda members: [m.value for m in members],
            length=32,
        ),
        nullable=False,
    )
    file_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    file_key: Mapped[str] = mapped_column(String(512), nullable=False)
