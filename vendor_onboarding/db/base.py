"""Async SQLAlchemy engine, declarative Base, and FastAPI dependency."""


from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from vendor_onboarding.core.config import settings


# ---------------------------------------------------------------------------
# SQLite behaviour
# ---------------------------------------------------------------------------
# Execution option set by DatabaseGateway.begin() on connections that will write
WRITE_TRANSACTION = "write_transaction"


def configure_sqlite(async_engine: AsyncEngine) -> None:
    """Enforce foreign keys and take the write lock at BEGIN on SQLite.

    pysqlite defers BEGIN until the first DML statement, which lets two
    writers deadlock while upgrading their locks. Explicit write transactions
    emit BEGIN IMMEDIATE so concurrent writers queue instead. Every other
    transaction (reads) gets a deferred BEGIN and keeps running alongside an
    open writer, seeing only committed rows.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(async_engine.sync_engine, "begin")
    def _on_begin(conn):
        if conn.get_execution_options().get(WRITE_TRANSACTION):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


def build_engine(database_url: str, **kwargs) -> AsyncEngine:
    engine_kwargs: dict = {"pool_pre_ping": True, **kwargs}
    is_sqlite = database_url.startswith("sqlite")
    # SQLite (local dev) doesn't support connection pooling parameters
    if is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}

    async_engine = create_async_engine(database_url, **engine_kwargs)
    if is_sqlite:
        configure_sqlite(async_engine)
    return async_engine


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
engine = build_engine(settings.database_url, echo=settings.app_env == "development")

# ---------------------------------------------------------------------------
# Declarative Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """All ORM models inherit from this base."""

# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------
def get_engine() -> AsyncEngine:
    """Return the application engine; tests override this dependency."""
    return engine
