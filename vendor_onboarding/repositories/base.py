"""Generic repository over a :class:`DatabaseGateway`.

Repositories build parameterized statements and hand them to the gateway;
they never open, commit, or roll back transactions themselves.
"""

from __future__ import annotations

from typing import Any, Generic, Mapping, TypeVar

from sqlalchemy import Table, bindparam, insert, select

from vendor_onboarding.db.base import Base
from vendor_onboarding.db.gateway import DatabaseGateway

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, gateway: DatabaseGateway):
        self._gateway = gateway

    @property
    def table(self) -> Table:
        return self.model.__table__

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def exists(self, entity_id: str) -> bool:
        result = await self._gateway.execute(
            select(self.table.c.id).where(self.table.c.id == bindparam("entity_id")),
            {"entity_id": entity_id},
        )
        return result.row_count > 0

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def insert(self, values: Mapping[str, Any]) -> str:
        """Insert one row and return its generated primary key."""
        result = await self._gateway.execute(insert(self.table), values)
        return result.generated_id
