"""Vendor Pydantic schemas (request DTOs and response models)."""


from datetime import datetime
from typing import Annotated, Any

from pydantic import Field, ValidationInfo, field_validator

from vendor_onboarding.schemas.common import CamelModel, FormModel
from vendor_onboarding.schemas.document import DocumentDescriptor, DocumentOut

# Column groups of the flat registration form, by destination table
VENDOR_FIELDS = (
    "name",
    "trade_name",
    "email_id",
    "phone_number",
    "type_of_organization",
    "nature_of_business",
    "working_hours",
)
BANKING_FIELDS = (
    "bank_name",
    "branch_address",
    "branch_phone_number",
    "account_number",
    "type_of_account",
    "ifsc_code",
)
IDENTIFICATION_FIELDS = (
    "pan_number",
    "aadhar_number",
    "gst_number",
    "pf_registration_number",
    "esic_registration_number",
)
VERIFICATION_KINDS = ("pan", "aadhar", "gst", "bank_details")

CustomFieldName = Annotated[str, Field(max_length=255)]


class VerificationFlag(CamelModel):
    verified: bool = False
    verified_at: datetime | None = None


class Verifications(CamelModel):
    pan: VerificationFlag = Field(default_factory=VerificationFlag)
    aadhar: VerificationFlag = Field(default_factory=VerificationFlag)
    gst: VerificationFlag = Field(default_factory=VerificationFlag)
    bank_details: VerificationFlag = Field(default_factory=VerificationFlag)

    @field_validator("*", mode="before")
    @classmethod
    def _missing_flag_is_unverified(cls, value: Any) -> Any:
        return {} if value is None else value


class VendorCreate(FormModel):
    # Basic information
    name: str = Field(max_length=255)
    trade_name: str | None = Field(default=None, max_length=255)
    email_id: str | None = Field(default=None, max_length=255)
    phone_number: str | None = Field(default=None, max_length=50)
    type_of_organization: str | None = Field(default=None, max_length=100)
    nature_of_business: str | None = Field(default=None, max_length=255)
    working_hours: str | None = Field(default=None, max_length=100)

    # Banking details
    bank_name: str | None = Field(default=None, max_length=255)
    branch_address: str | None = None
    branch_phone_number: str | None = Field(default=None, max_length=50)
    account_number: str | None = Field(default=None, max_length=50)
    type_of_account: str | None = Field(default=None, max_length=50)
    ifsc_code: str | None = Field(default=None, max_length=20)

    # Identification details
    pan_number: str | None = Field(default=None, max_length=20)
    aadhar_number: str | None = Field(default=None, max_length=20)
    gst_number: str | None = Field(default=None, max_length=20)
    pf_registration_number: str | None = Field(default=None, max_length=50)
    esic_registration_number: str | None = Field(default=None, max_length=50)

    verifications: Verifications = Field(default_factory=Verifications)
    custom_fields: dict[CustomFieldName, str | None] = Field(default_factory=dict)
    documents: list[DocumentDescriptor] = Field(default_factory=list)

    @field_validator("verifications", "custom_fields", "documents", mode="before")
    @classmethod
    def _null_collection_is_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "documents" else {}
        return value

    @field_validator("custom_fields", mode="before")
    @classmethod
    def _stringify_custom_values(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                str(k): (v if v is None or isinstance(v, str) else str(v))
                for k, v in value.items()
            }
        return value

    def has_banking_details(self) -> bool:
        return any(getattr(self, f) is not None for f in BANKING_FIELDS)


class VendorCreateRequest(CamelModel):
    """`POST /vendor` body: the registration form nested under `data`."""

    data: dict[str, Any] | None = Field(
        default=None, description="Vendor registration form fields (camelCase)."
    )


class VendorCreated(CamelModel):
    vendor_id: str


class BankingOut(CamelModel):
    bank_name: str | None = None
    branch_address: str | None = None
    branch_phone_number: str | None = None
    account_number: str | None = None
    type_of_account: str | None = None
    ifsc_code: str | None = None


class IdentificationOut(CamelModel):
    pan_number: str | None = None
    aadhar_number: str | None = None
    gst_number: str | None = None
    pf_registration_number: str | None = None
    esic_registration_number: str | None = None


class CustomFieldOut(CamelModel):
    id: str
    field_name: str
    field_value: str | None = None


class VendorOut(CamelModel):
    id: str
    name: str
    trade_name: str | None = None
    email_id: str | None = None
    phone_number: str | None = None
    type_of_organization: str | None = None
    nature_of_business: str | None = None
    working_hours: str | None = None
    created_at: datetime
    updated_at: datetime
    banking: BankingOut | None = None
    identification: IdentificationOut | None = None
    verifications: Verifications = Field(default_factory=Verifications)
    documents: list[DocumentOut] = Field(default_factory=list)
    custom_fields: list[CustomFieldOut] = Field(default_factory=list)
