"""Persistence port and its key-value backends.

The scheduler only needs ``get`` (at startup, per key) and ``set_many``
(once per state change, all keys together). Absence of a key is never an
error; callers pass a default.

Backends:
- :class:`MemoryStore` — a dict, for tests and ``backend = "memory"``.
- :class:`SqliteStore` — the ``state`` table, one transaction per write.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError

from pomoctl.infrastructure.database.schema import state

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """The backing store could not be read or written."""


class StateStore(Protocol):
    """Key-value persistence port for primitive-serializable values."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for *key*, or *default* if absent."""
        ...

    def set_many(self, values: Mapping[str, Any]) -> None:
        """Write all *values* atomically."""
        ...


class MemoryStore:
    """In-process dict store."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})
        self.writes = 0

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set_many(self, values: Mapping[str, Any]) -> None:
        self._data.update(values)
        self.writes += 1

    def as_dict(self) -> dict[str, Any]:
        return dict(self._data)


class SqliteStore:
    """Store backed by the SQLite ``state`` table.

    Values are JSON-encoded on write and decoded on read. Any SQLAlchemy
    failure is re-raised as :class:`PersistenceError`.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def get(self, key: str, default: Any = None) -> Any:
        try:
            with self._engine.connect() as conn:
                raw = conn.execute(select(state.c.value).where(state.c.key == key)).scalar()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to read {key!r}: {exc}") from exc

        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding undecodable value for %s", key)
            return default

    def set_many(self, values: Mapping[str, Any]) -> None:
        if not values:
            return
        modified = datetime.now(UTC).isoformat()
        rows = [
            {"key": key, "value": json.dumps(value), "modified": modified}
            for key, value in values.items()
        ]
        stmt = sqlite_insert(state)
        stmt = stmt.on_conflict_do_update(
            index_elements=[state.c.key],
            set_={"value": stmt.excluded.value, "modified": stmt.excluded.modified},
        )
        try:
            with self._engine.begin() as conn:
                conn.execute(stmt, rows)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to write state: {exc}") from exc

    def close(self) -> None:
        self._engine.dispose()
