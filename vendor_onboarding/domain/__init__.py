"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  vendor.py        — vendor_master plus banking, identification and verification rows
  custom_field.py  — free-form name/value pairs (one-to-many)
  document.py      — uploaded document references (one-to-many) and DocumentType
  mixins.py        — shared id, timestamp and vendor_id columns
"""

from vendor_onboarding.domain.custom_field import VendorCustomField
from vendor_onboarding.domain.document import DocumentType, VendorDocument
from vendor_onboarding.domain.vendor import (
    Vendor,
    VendorBankingDetails,
    VendorIdentification,
    VendorVerification,
)

__all__ = [
    "DocumentType",
    "Vendor",
    "VendorBankingDetails",
    "VendorCustomField",
    "VendorDocument",
    "VendorIdentification",
    "VendorVerification",
]
