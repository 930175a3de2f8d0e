"""SQLite key-value database via SQLAlchemy Core."""

from pomoctl.infrastructure.database.engine import create_db_engine, init_database
from pomoctl.infrastructure.database.schema import metadata, state

__all__ = [
    "create_db_engine",
    "init_database",
    "metadata",
    "state",
]
