"""Database package — async SQLAlchemy engine, declarative Base, and the transaction gateway."""
from vendor_onboarding.db.base import Base, engine, get_engine
from vendor_onboarding.db.gateway import DatabaseGateway, QueryResult, TransactionState

__all__ = ["Base", "DatabaseGateway", "QueryResult", "TransactionState", "engine", "get_engine"]
