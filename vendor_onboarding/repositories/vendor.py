"""Vendor aggregate repositories.

One repository per table of the aggregate for the write path, plus the
joined read that rebuilds the nested :class:`VendorOut` view.
"""

from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy import Table, bindparam, select

from vendor_onboarding.domain import (
    Vendor,
    VendorBankingDetails,
    VendorCustomField,
    VendorDocument,
    VendorIdentification,
    VendorVerification,
)
from vendor_onboarding.repositories.base import BaseRepository
from vendor_onboarding.schemas.document import DocumentDescriptor
from vendor_onboarding.schemas.vendor import (
    BANKING_FIELDS,
    IDENTIFICATION_FIELDS,
    VENDOR_FIELDS,
    VERIFICATION_KINDS,
    VendorCreate,
    VendorOut,
)


class VendorRepository(BaseRepository[Vendor]):
    model = Vendor

    async def insert_vendor(self, data: VendorCreate) -> str:
        return await self.insert(data.model_dump(include=set(VENDOR_FIELDS)))

    async def fetch_views(self, vendor_id: str | None = None) -> list[VendorOut]:
        """Return denormalized vendor views, newest first.

        A single statement left-joins the master table with every dependent
        table; the flat rows (one per document x custom field combination)
        are folded back into one view per vendor.
        """
        statement = _joined_select()
        parameters = None
        if vendor_id is not None:
            statement = statement.where(Vendor.__table__.c.id == bindparam("vendor_id"))
            parameters = {"vendor_id": vendor_id}

        result = await self._gateway.execute(statement, parameters)
        return _fold_rows(result.rows)


class BankingDetailsRepository(BaseRepository[VendorBankingDetails]):
    model = VendorBankingDetails

    async def insert_for(self, vendor_id: str, data: VendorCreate) -> str:
        return await self.insert(
            {"vendor_id": vendor_id, **data.model_dump(include=set(BANKING_FIELDS))}
        )


class IdentificationRepository(BaseRepository[VendorIdentification]):
    model = VendorIdentification

    async def insert_for(self, vendor_id: str, data: VendorCreate) -> str:
        return await self.insert(
            {"vendor_id": vendor_id, **data.model_dump(include=set(IDENTIFICATION_FIELDS))}
        )


class VerificationRepository(BaseRepository[VendorVerification]):
    model = VendorVerification

    async def insert_for(self, vendor_id: str, data: VendorCreate) -> str:
        values: dict[str, Any] = {"vendor_id": vendor_id}
        for kind in VERIFICATION_KINDS:
            flag = getattr(data.verifications, kind)
            values[f"{kind}_verified"] = flag.verified
            values[f"{kind}_verified_at"] = flag.verified_at
        return await self.insert(values)


class CustomFieldRepository(BaseRepository[VendorCustomField]):
    model = VendorCustomField

    async def insert_for(self, vendor_id: str, field_name: str, field_value: str | None) -> str:
        return await self.insert(
            {"vendor_id": vendor_id, "field_name": field_name, "field_value": field_value}
        )


class DocumentRepository(BaseRepository[VendorDocument]):
    model = VendorDocument

    async def insert_for(self, vendor_id: str, document: DocumentDescriptor) -> str:
        return await self.insert(
            {
                "vendor_id": vendor_id,
                "document_type": document.document_type,
                "file_url": document.file_url,
                "file_key": document.file_key,
            }
        )

    async def fetch(self, document_ids: Iterable[str]) -> list[dict[str, Any]]:
        table = self.table
        result = await self._gateway.execute(
            select(*table.c)
            .where(table.c.id.in_(bindparam("document_ids", expanding=True)))
            .order_by(table.c.created_at, table.c.id),
            {"document_ids": list(document_ids)},
        )
        return result.rows


# ---------------------------------------------------------------------------
# Joined read
# ---------------------------------------------------------------------------

_SECTIONS: dict[str, Table] = {
    "vendor": Vendor.__table__,
    "banking": VendorBankingDetails.__table__,
    "identification": VendorIdentification.__table__,
    "verification": VendorVerification.__table__,
    "document": VendorDocument.__table__,
    "custom_field": VendorCustomField.__table__,
}
_SEPARATOR = "__"


def _joined_select():
    vendor = _SECTIONS["vendor"]
    columns = [
        column.label(f"{section}{_SEPARATOR}{column.key}")
        for section, table in _SECTIONS.items()
        for column in table.c
    ]
    from_clause = vendor
    for section, table in _SECTIONS.items():
        if section != "vendor":
            from_clause = from_clause.outerjoin(table, table.c.vendor_id == vendor.c.id)

    document = _SECTIONS["document"]
    custom_field = _SECTIONS["custom_field"]
    return (
        select(*columns)
        .select_from(from_clause)
        .order_by(
            vendor.c.created_at.desc(),
            vendor.c.id,
            document.c.created_at,
            document.c.id,
            custom_field.c.id,
        )
    )


def _split(row: dict[str, Any]) -> dict[str, dict[str, Any]]:
    sections: dict[str, dict[str, Any]] = {section: {} for section in _SECTIONS}
    for label, value in row.items():
        section, _, column = label.partition(_SEPARATOR)
        sections[section][column] = value
    return sections


def _verifications(row: dict[str, Any]) -> dict[str, Any]:
    if row.get("id") is None:
        return {}
    return {
        kind: {"verified": row[f"{kind}_verified"], "verified_at": row[f"{kind}_verified_at"]}
        for kind in VERIFICATION_KINDS
    }


def _fold_rows(rows: list[dict[str, Any]]) -> list[VendorOut]:
    views: dict[str, dict[str, Any]] = {}
    for row in rows:
        sections = _split(row)
        vendor = sections["vendor"]
        view = views.get(vendor["id"])
        if view is None:
            banking = sections["banking"]
            identification = sections["identification"]
            view = {
                **vendor,
                "banking": banking if banking["id"] is not None else None,
                "identification": identification if identification["id"] is not None else None,
                "verifications": _verifications(sections["verification"]),
                "documents": {},
                "custom_fields": {},
            }
            views[vendor["id"]] = view

        document = sections["document"]
        if document["id"] is not None:
            view["documents"].setdefault(document["id"], document)
        custom_field = sections["custom_field"]
        if custom_field["id"] is not None:
            view["custom_fields"].setdefault(custom_field["id"], custom_field)

    return [
        VendorOut.model_validate(
            {
                **view,
                "documents": list(view["documents"].values()),
                "custom_fields": list(view["custom_fields"].values()),
            }
        )
        for view in views.values()
    ]
