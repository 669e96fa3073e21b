"""Connection/transaction gateway over a single database connection.

The gateway is the only place that touches a raw connection. It runs
parameterized statements, hands back a uniform :class:`QueryResult`, and
turns driver failures into :mod:`vendor_onboarding.core.exceptions` types.
It performs no business validation.

Usage::

    async with DatabaseGateway(engine) as gateway:   # acquire ... release
        await gateway.begin()
        result = await gateway.execute(insert(Vendor).values(name="Acme"))
        await gateway.commit()
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from vendor_onboarding.core.exceptions import (
    DatabaseConnectionError,
    NoActiveSessionError,
    QueryError,
)
from vendor_onboarding.db.base import WRITE_TRANSACTION


class TransactionState(str, enum.Enum):
    IDLE = "idle"
    OPEN = "open"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True)
class QueryResult:
    """Outcome of one executed statement."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0
    generated_id: Optional[Any] = None
    status: str = "success"
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    tat: float = 0.0


def _describe(statement: Any) -> str:
    return " ".join(str(statement).split())


class DatabaseGateway:
    def __init__(self, engine: AsyncEngine, logger: logging.Logger | None = None):
        self._engine = engine
        self._logger = logger or logging.getLogger(__name__)
        self._connection: AsyncConnection | None = None
        self.state = TransactionState.IDLE

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    @property
    def is_acquired(self) -> bool:
        return self._connection is not None

    async def acquire(self) -> DatabaseGateway:
        if self._connection is not None:
            return self
        try:
            self._connection = await self._engine.connect()
        except (SQLAlchemyError, OSError) as exc:
            self._logger.error("Failed to connect to the database: %s", exc)
            raise DatabaseConnectionError(f"Failed to connect to the database: {exc}") from exc
        self._logger.debug("Database connection acquired")
        return self

    async def release(self) -> None:
        """Close the connection. Safe to call repeatedly and after failures."""
        connection, self._connection = self._connection, None
        if connection is None:
            return
        try:
            await connection.close()
        except SQLAlchemyError as exc:
            self._logger.warning("Error while closing database connection: %s", exc)
        else:
            self._logger.debug("Database connection released")

    async def __aenter__(self) -> DatabaseGateway:
        return await self.acquire()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.release()

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def _require_connection(self, operation: str) -> AsyncConnection:
        if self._connection is None:
            raise NoActiveSessionError(operation)
        return self._connection

    async def begin(self) -> None:
        connection = self._require_connection("begin a transaction")
        try:
            # Explicit transactions are the write path; SQLite takes its write lock up front
            await connection.execution_options(**{WRITE_TRANSACTION: True})
            await connection.begin()
        except SQLAlchemyError as exc:
            raise QueryError("BEGIN", exc) from exc
        self.state = TransactionState.OPEN
        self._logger.debug("Transaction started")

    async def commit(self) -> None:
        connection = self._require_connection("commit")
        try:
            await connection.commit()
        except SQLAlchemyError as exc:
            raise QueryError("COMMIT", exc) from exc
        self.state = TransactionState.COMMITTED
        self._logger.debug("Transaction committed")

    async def rollback(self) -> None:
        connection = self._require_connection("roll back")
        try:
            await connection.rollback()
        except SQLAlchemyError as exc:
            raise QueryError("ROLLBACK", exc) from exc
        self.state = TransactionState.ROLLED_BACK
        self._logger.info("Transaction rolled back")

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    async def execute(
        self, statement: Any, parameters: Mapping[str, Any] | None = None
    ) -> QueryResult:
        """Run one parameterized statement and return its :class:`QueryResult`."""
        connection = self._require_connection("execute a statement")
        started_at = datetime.now(timezone.utc)
        start = time.monotonic()

        try:
            if parameters is None:
                result = await connection.execute(statement)
            else:
                result = await connection.execute(statement, dict(parameters))

            generated_id = None
            if getattr(statement, "is_insert", False):
                primary_key = result.inserted_primary_key
                generated_id = primary_key[0] if primary_key else None

            if result.returns_rows:
                rows = [dict(row) for row in result.mappings().all()]
                row_count = len(rows)
            else:
                rows = []
                row_count = max(result.rowcount, 0)
        except SQLAlchemyError as exc:
            self._logger.error("Error executing query: %s - %s", _describe(statement), exc)
            raise QueryError(_describe(statement), exc) from exc

        return QueryResult(
            rows=rows,
            row_count=row_count,
            generated_id=generated_id,
            started_at=started_at,
            ended_at=datetime.now(timezone.utc),
            tat=round(time.monotonic() - start, 6),
        )
