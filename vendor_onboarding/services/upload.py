"""Document upload: validate the file, place it in storage, optionally attach it.

Every check runs before storage is touched, so a rejected upload never
writes to S3 or to the database.
"""

from __future__ import annotations

import logging
from typing import Protocol

from vendor_onboarding.core.exceptions import ValidationError
from vendor_onboarding.domain.document import DocumentType
from vendor_onboarding.schemas.document import DocumentDescriptor, UploadedDocument
from vendor_onboarding.services.vendor import VendorService

ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "application/pdf"})
VALID_DOCUMENT_TYPES = tuple(t.value for t in DocumentType)


class DocumentStorage(Protocol):
    async def upload(
        self, contents: bytes, filename: str, content_type: str, document_type: DocumentType
    ) -> UploadedDocument: ...

    async def delete(self, key: str) -> None: ...


def parse_document_type(value: str | None) -> DocumentType:
    if not value:
        raise ValidationError("Document type is required")
    try:
        return DocumentType(value)
    except ValueError:
        raise ValidationError(
            f"Invalid document type. Must be one of: {', '.join(VALID_DOCUMENT_TYPES)}"
        ) from None


class DocumentUploadService:
    def __init__(
        self,
        storage: DocumentStorage,
        max_size_bytes: int,
        vendors: VendorService | None = None,
        logger: logging.Logger | None = None,
    ):
        self._storage = storage
        self._max_size_bytes = max_size_bytes
        self._vendors = vendors
        self._logger = logger or logging.getLogger(__name__)

    @property
    def max_size_bytes(self) -> int:
        return self._max_size_bytes

    def validate(
        self, contents: bytes | None, content_type: str | None, document_type: str | None
    ) -> DocumentType:
        doc_type = parse_document_type(document_type)
        if not contents:
            raise ValidationError("No file provided")
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise ValidationError("Invalid file type. Only JPG, JPEG, PNG and PDF are allowed")
        if len(contents) > self._max_size_bytes:
            limit_mb = self._max_size_bytes // (1024 * 1024)
            raise ValidationError(f"File size exceeds the {limit_mb}MB limit")
        return doc_type

    async def upload(
        self,
        contents: bytes | None,
        filename: str | None,
        content_type: str | None,
        document_type: str | None,
        vendor_id: str | None = None,
    ) -> UploadedDocument:
        doc_type = self.validate(contents, content_type, document_type)
        uploaded = await self._storage.upload(
            contents, filename or "document", content_type, doc_type
        )
        if vendor_id is None:
            return uploaded
        if self._vendors is None:
            raise RuntimeError("DocumentUploadService was built without a VendorService")

        descriptor = DocumentDescriptor(
            document_type=doc_type, file_url=uploaded.url, file_key=uploaded.key
        )
        try:
            (document,) = await self._vendors.attach_documents(vendor_id, [descriptor])
        except Exception:
            await self._discard(uploaded.key)
            raise
        return uploaded.model_copy(update={"document_id": document.id})

    async def _discard(self, key: str) -> None:
        """Remove an object whose database row could not be written (best effort)."""
        try:
            await self._storage.delete(key)
        except Exception:
            self._logger.exception("Could not remove orphaned upload %s", key)
