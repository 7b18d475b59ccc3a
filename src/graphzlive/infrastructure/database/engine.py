"""Database engine setup for SQLite with WAL mode.

SQLite stands in for the hosted document database and auth service:
WAL mode for concurrent readers, the JSON1 functions for field-level
document updates.  The DB is stored at {site_root}/.graphz/graphz.db.

SQLAlchemy Core (not ORM) is used because graphz is a short-lived
CLI process — no benefit from session management or identity maps.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from graphzlive.infrastructure.database.schema import metadata

DB_FILENAME = "graphz.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA busy_timeout=5000")
        cursor.close()

    return engine


def init_database(data_dir: Path) -> Engine:
    """Initialize the graphz database at ``{data_dir}/graphz.db``.

    Creates *data_dir* and all tables from :data:`schema.metadata`.
    Idempotent — safe to call on an existing site.

    Returns the engine ready for use.
    """
    data_dir.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(data_dir / DB_FILENAME)
    metadata.create_all(engine)
    return engine
