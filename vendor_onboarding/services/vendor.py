"""Vendor service — the all-or-nothing writer for the vendor aggregate, and its reads.

A vendor is persisted as one master row plus its dependents (banking,
identification, verification flags, custom fields, documents). Creation runs
every insert on one connection inside one transaction:

    Idle -> TransactionOpen -> Committed | RolledBack

Any failing step rolls the whole transaction back and surfaces as
:class:`TransactionError`; nothing is retried here.

Rule: No FastAPI here. Statements are built by the repositories and executed
through :class:`DatabaseGateway`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence

import pydantic
from sqlalchemy.ext.asyncio import AsyncEngine

from vendor_onboarding.core.exceptions import NotFoundError, TransactionError, ValidationError
from vendor_onboarding.db.gateway import DatabaseGateway
from vendor_onboarding.repositories.vendor import (
    BankingDetailsRepository,
    CustomFieldRepository,
    DocumentRepository,
    IdentificationRepository,
    VendorRepository,
    VerificationRepository,
)
from vendor_onboarding.schemas.document import DocumentDescriptor, DocumentOut
from vendor_onboarding.schemas.vendor import VendorCreate, VendorCreated, VendorOut

GatewayFactory = Callable[[], DatabaseGateway]


def _describe_errors(exc: pydantic.ValidationError) -> str:
    missing = [
        ".".join(str(part) for part in err["loc"])
        for err in exc.errors()
        if err["type"] == "missing"
    ]
    if missing and len(missing) == len(exc.errors()):
        return "Required fields missing: " + ", ".join(missing)
    return "Invalid vendor data: " + "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


def parse_vendor(data: VendorCreate | Mapping[str, Any]) -> VendorCreate:
    """Validate a registration payload; raises :class:`ValidationError` on bad input."""
    if isinstance(data, VendorCreate):
        return data
    try:
        return VendorCreate.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        raise ValidationError(_describe_errors(exc)) from exc


class VendorService:
    def __init__(
        self,
        engine: AsyncEngine,
        logger: logging.Logger | None = None,
        gateway_factory: GatewayFactory | None = None,
    ):
        self._logger = logger or logging.getLogger(__name__)
        self._gateway_factory = gateway_factory or (
            lambda: DatabaseGateway(engine, logger=self._logger)
        )

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create_vendor(self, data: VendorCreate | Mapping[str, Any]) -> VendorCreated:
        """Persist a vendor and all its dependent rows atomically."""
        vendor = parse_vendor(data)

        async with self._gateway_factory() as gateway:
            vendor_id: str | None = None
            try:
                await gateway.begin()

                vendor_id = await VendorRepository(gateway).insert_vendor(vendor)
                self._logger.info("Vendor inserted with ID: %s", vendor_id)

                if vendor.has_banking_details():
                    await BankingDetailsRepository(gateway).insert_for(vendor_id, vendor)

                await IdentificationRepository(gateway).insert_for(vendor_id, vendor)
                await VerificationRepository(gateway).insert_for(vendor_id, vendor)

                custom_fields = CustomFieldRepository(gateway)
                for field_name, field_value in vendor.custom_fields.items():
                    await custom_fields.insert_for(vendor_id, field_name, field_value)

                documents = DocumentRepository(gateway)
                for document in vendor.documents:
                    await documents.insert_for(vendor_id, document)

                await gateway.commit()
            except Exception as exc:
                await self._abort(gateway, "create_vendor", vendor_id, exc)
                raise TransactionError("create_vendor", exc) from exc

        self._logger.info(
            "Vendor %s created (%d custom fields, %d documents)",
            vendor_id, len(vendor.custom_fields), len(vendor.documents),
        )
        return VendorCreated(vendor_id=vendor_id)

    async def attach_documents(
        self, vendor_id: str, documents: Sequence[DocumentDescriptor]
    ) -> list[DocumentOut]:
        """Record already-uploaded documents for an existing vendor, all or nothing."""
        async with self._gateway_factory() as gateway:
            try:
                await gateway.begin()
                if not await VendorRepository(gateway).exists(vendor_id):
                    raise NotFoundError("Vendor", vendor_id)

                repo = DocumentRepository(gateway)
                document_ids = [await repo.insert_for(vendor_id, doc) for doc in documents]
                rows = await repo.fetch(document_ids)
                await gateway.commit()
            except NotFoundError:
                await self._rollback(gateway, "attach_documents", vendor_id)
                raise
            except Exception as exc:
                await self._abort(gateway, "attach_documents", vendor_id, exc)
                raise TransactionError("attach_documents", exc) from exc

        self._logger.info("Attached %d document(s) to vendor %s", len(rows), vendor_id)
        return [DocumentOut.model_validate(row) for row in rows]

    async def _abort(
        self,
        gateway: DatabaseGateway,
        operation: str,
        vendor_id: str | None,
        cause: BaseException,
    ) -> None:
        self._logger.error(
            "%s failed (vendor_id=%s), rolling back: %s", operation, vendor_id, cause
        )
        await self._rollback(gateway, operation, vendor_id)

    async def _rollback(
        self, gateway: DatabaseGateway, operation: str, vendor_id: str | None
    ) -> None:
        try:
            await gateway.rollback()
        except Exception:
            # The connection is closed on release, which discards the transaction anyway.
            self._logger.exception("%s: rollback failed (vendor_id=%s)", operation, vendor_id)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def list_vendors(self) -> list[VendorOut]:
        async with self._gateway_factory() as gateway:
            return await VendorRepository(gateway).fetch_views()

    async def get_vendor(self, vendor_id: str) -> VendorOut:
        async with self._gateway_factory() as gateway:
            views = await VendorRepository(gateway).fetch_views(vendor_id)
        if not views:
            raise NotFoundError("Vendor", vendor_id)
        return views[0]
