"""Document Pydantic schemas (descriptors, upload results, stored documents)."""

from datetime import datetime

from pydantic import Field

from vendor_onboarding.domain.document import DocumentType
from vendor_onboarding.schemas.common import CamelModel, FormModel


class DocumentDescriptor(FormModel):
    """A file already placed in object storage, ready to be recorded for a vendor."""

    document_type: DocumentType
    file_url: str = Field(min_length=1, max_length=1024)
    file_key: str = Field(min_length=1, max_length=512)


class AttachDocumentsRequest(CamelModel):
    documents: list[DocumentDescriptor] = Field(min_length=1)


class UploadedDocument(CamelModel):
    """Result of placing one file in object storage."""

    url: str
    key: str
    file_name: str
    file_type: str
    file_size: int
    document_type: DocumentType
    document_id: str | None = Field(
        default=None,
        description="Set when the upload was attached to a vendor in the same request.",
    )


class DocumentOut(CamelModel):
    id: str
    document_type: DocumentType
    file_url: str
    file_key: str
    created_at: datetime
