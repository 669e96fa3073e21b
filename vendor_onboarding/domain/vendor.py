"""SQLAlchemy ORM models for the vendor aggregate root and its one-to-one details.

A vendor is stored across several tables that all share ``vendor_id``:
  - vendor_master           — the aggregate root (this module)
  - vendor_banking_details  — zero or one row (this module)
  - vendor_identification   — one row (this module)
  - vendor_verifications    — exactly one row (this module)
  - vendor_custom_fields    — zero or more rows (custom_field.py)
  - vendor_documents        — zero or more rows (document.py)
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from vendor_onboarding.db.base import Base
from vendor_onboarding.domain.mixins import (
    TimestampMixin,
    UTCDateTime,
    UUIDPrimaryKeyMixin,
    VendorOwnedMixin,
)


class Vendor(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "vendor_master"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    trade_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email_id: Mapped[Optional[str]] = mapped_column(String(255), index=True, nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    type_of_organization: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    nature_of_business: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    working_hours: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)


class VendorBankingDetails(Base, UUIDPrimaryKeyMixin, VendorOwnedMixin):
    __tablename__ = "vendor_banking_details"

    bank_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    branch_address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    branch_phone_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    account_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    type_of_account: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    ifsc_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)


class VendorIdentification(Base, UUIDPrimaryKeyMixin, VendorOwnedMixin):
    __tablename__ = "vendor_identification"

    pan_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    aadhar_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    gst_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    pf_registration_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    esic_registration_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)


def _flag() -> Mapped[bool]:
    return mapped_column(Boolean, default=False, server_default=false(), nullable=False)


def _flag_timestamp() -> Mapped[Optional[datetime]]:
    return mapped_column(UTCDateTime(), nullable=True)


class VendorVerification(Base, UUIDPrimaryKeyMixin, VendorOwnedMixin):
    __tablename__ = "vendor_verifications"

    pan_verified: Mapped[bool] = _flag()
    pan_verified_at: Mapped[Optional[datetime]] = _flag_timestamp()
    aadhar_verified: Mapped[bool] = _flag()
    aadhar_verified_at: Mapped[Optional[datetime]] = _flag_timestamp()
    gst_verified: Mapped[bool] = _flag()
    gst_verified_at: Mapped[Optional[datetime]] = _flag_timestamp()
    bank_details_verified: Mapped[bool] = _flag()
    bank_details_verified_at: Mapped[Optional[datetime]] = _flag_timestamp()
