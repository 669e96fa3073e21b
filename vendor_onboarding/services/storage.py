"""S3 object storage for vendor documents.

boto3 is synchronous, so every call is pushed to FastAPI's threadpool to
keep the event loop free.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from vendor_onboarding.core.config import Settings, settings
from vendor_onboarding.core.exceptions import StorageError
from vendor_onboarding.domain.document import DocumentType
from vendor_onboarding.schemas.document import UploadedDocument


def build_s3_client(config: Settings) -> Any:
    return boto3.client(
        "s3",
        region_name=config.aws_region,
        aws_access_key_id=config.aws_access_key_id,
        aws_secret_access_key=config.aws_secret_access_key,
        endpoint_url=config.s3_endpoint_url,
    )


def object_key(document_type: DocumentType, filename: str) -> str:
    """`vendors/{document_type}/{uuid}.{ext}` — the original name is never reused."""
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    key = f"vendors/{document_type.value}/{uuid.uuid4()}"
    return f"{key}.{extension}" if extension else key


class S3DocumentStorage:
    def __init__(
        self,
        client: Any,
        bucket: str,
        region: str,
        acl: str | None = None,
        logger: logging.Logger | None = None,
    ):
        self._client = client
        self._bucket = bucket
        self._region = region
        self._acl = acl
        self._logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, config: Settings = settings) -> S3DocumentStorage:
        return cls(
            build_s3_client(config),
            bucket=config.aws_bucket_name,
            region=config.aws_region,
            acl=config.s3_object_acl,
        )

    def public_url(self, key: str) -> str:
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"

    async def upload(
        self,
        contents: bytes,
        filename: str,
        content_type: str,
        document_type: DocumentType,
    ) -> UploadedDocument:
        key = object_key(document_type, filename)
        params: dict[str, Any] = {
            "Bucket": self._bucket,
            "Key": key,
            "Body": contents,
            "ContentType": content_type,
        }
        if self._acl:
            params["ACL"] = self._acl

        try:
            await run_in_threadpool(self._client.put_object, **params)
        except (ClientError, BotoCoreError) as exc:
            self._logger.error("Error uploading %s to s3://%s/%s: %s", filename, self._bucket, key, exc)
            raise StorageError("Failed to upload file to storage") from exc

        self._logger.info("Uploaded %s (%d bytes) to s3://%s/%s", filename, len(contents), self._bucket, key)
        return UploadedDocument(
            url=self.public_url(key),
            key=key,
            file_name=filename,
            file_type=content_type,
            file_size=len(contents),
            document_type=document_type,
        )

    async def delete(self, key: str) -> None:
        try:
            await run_in_threadpool(self._client.delete_object, Bucket=self._bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            self._logger.error("Error deleting s3://%s/%s: %s", self._bucket, key, exc)
            raise StorageError(f"Failed to delete '{key}' from storage") from exc
        self._logger.info("Deleted s3://%s/%s", self._bucket, key)
