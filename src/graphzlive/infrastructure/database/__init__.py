"""SQLite database engine and schema via SQLAlchemy Core."""

from graphzlive.infrastructure.database.engine import create_db_engine, init_database
from graphzlive.infrastructure.database.schema import accounts, documents, metadata

__all__ = [
    "accounts",
    "create_db_engine",
    "documents",
    "init_database",
    "metadata",
]
