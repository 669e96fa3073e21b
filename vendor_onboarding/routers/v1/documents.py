"""Vendor document endpoints — thin HTTP layer.

Validation and storage live in :mod:`vendor_onboarding.services.upload`;
this router only unpacks the multipart form.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from vendor_onboarding.core.response import SuccessEnvelope, success
from vendor_onboarding.routers.dependencies import get_upload_service, get_vendor_service
from vendor_onboarding.schemas.document import AttachDocumentsRequest, DocumentOut, UploadedDocument
from vendor_onboarding.services.upload import DocumentUploadService
from vendor_onboarding.services.vendor import VendorService

router = APIRouter(tags=["Documents"])


@router.post("/upload-vendor-documents", response_model=SuccessEnvelope[UploadedDocument])
async def upload_vendor_document(
    request: Request,
    document: Optional[UploadFile] = File(default=None),
    document_type: Optional[str] = Form(default=None, alias="documentType"),
    vendor_id: Optional[str] = Form(default=None, alias="vendorId"),
    service: DocumentUploadService = Depends(get_upload_service),
):
    """Upload one JPG/PNG/PDF (field `document`) to storage.

    When `vendorId` is given the stored file is also recorded against that
    vendor; otherwise the returned url/key can be passed in the `documents`
    list of `POST /vendor`.
    """
    # One byte past the limit is enough for the size check to reject the file
    contents = await document.read(service.max_size_bytes + 1) if document is not None else None
    uploaded = await service.upload(
        contents,
        document.filename if document is not None else None,
        document.content_type if document is not None else None,
        document_type,
        vendor_id=vendor_id or None,
    )
    return success(request, uploaded, f"Document {uploaded.file_name} uploaded successfully")


@router.post("/vendor/{vendor_id}/documents", response_model=SuccessEnvelope[list[DocumentOut]])
async def attach_vendor_documents(
    request: Request,
    vendor_id: str,
    body: AttachDocumentsRequest,
    service: VendorService = Depends(get_vendor_service),
):
    """Record documents that were already uploaded for an existing vendor."""
    documents = await service.attach_documents(vendor_id, body.documents)
    return success(request, documents, f"{len(documents)} document(s) attached")
