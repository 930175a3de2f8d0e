"""Database engine setup for SQLite with WAL mode.

The DB is stored at ``{state_root}/.pomoctl/pomoctl.db``. SQLAlchemy Core
(not ORM) is used because pomoctl is a short-lived CLI process with a
single key-value table.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from pomoctl.infrastructure.database.schema import metadata

DB_FILENAME = "pomoctl.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def init_database(state_root: Path, dirname: str = ".pomoctl") -> Engine:
    """Initialize the state database at ``{state_root}/{dirname}/pomoctl.db``.

    Creates the directory and all tables from :data:`schema.metadata`.
    Idempotent — safe to call on an existing state directory.
    """
    db_dir = state_root / dirname
    db_dir.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(db_dir / DB_FILENAME)
    metadata.create_all(engine)
    return engine
