"""SQLAlchemy ORM model for free-form vendor attributes."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vendor_onboarding.db.base import Base
from vendor_onboarding.domain.mixins import UUIDPrimaryKeyMixin, VendorOwnedMixin


class VendorCustomField(Base, UUIDPrimaryKeyMixin, VendorOwnedMixin):
    """One name/value pair; names are not unique per vendor."""

    __tablename__ = "vendor_custom_fields"

    field_name: Mapped[str] = mapped_column(String(255), nullable=False)
    field_value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
