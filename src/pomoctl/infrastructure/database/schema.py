"""SQLAlchemy Core table definitions for the pomoctl state database.

Timer state is a flat key-value map; each value is stored JSON-encoded
so integers, booleans, and strings round-trip without a column per key.
"""

from __future__ import annotations

from sqlalchemy import Column, MetaData, Table, Text

metadata = MetaData()

state = Table(
    "state",
    metadata,
    Column("key", Text, primary_key=True),
    Column("value", Text, nullable=False),  # JSON
    Column("modified", Text, nullable=False),
)
