"""FastAPI dependency providers shared by the v1 routers."""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine

from vendor_onboarding.core.config import settings
from vendor_onboarding.db.base import get_engine
from vendor_onboarding.services.storage import S3DocumentStorage
from vendor_onboarding.services.upload import DocumentStorage, DocumentUploadService
from vendor_onboarding.services.vendor import VendorService


def get_vendor_service(engine: AsyncEngine = Depends(get_engine)) -> VendorService:
    return VendorService(engine)


@lru_cache()
def get_storage() -> DocumentStorage:
    """One S3 client per process; tests override this dependency."""
    return S3DocumentStorage.from_settings(settings)


def get_upload_service(
    storage: DocumentStorage = Depends(get_storage),
    vendors: VendorService = Depends(get_vendor_service),
) -> DocumentUploadService:
    return DocumentUploadService(storage, settings.max_upload_size_bytes, vendors=vendors)
