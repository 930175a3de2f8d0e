"""SessionSequence — an ordered, cyclic flow with a cursor.

The sequence is never empty and the cursor always indexes a valid item.
Advancing past the final item wraps to index 0: looping the whole flow
is the defined behavior, not an error.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pomoctl.domain.errors import ValidationError
from pomoctl.domain.session import Duration, SessionKind


class SessionSequence:
    """Ordered Durations plus a current-index cursor."""

    def __init__(self, items: Iterable[Duration]) -> None:
        self._items: tuple[Duration, ...] = ()
        self._cursor = 0
        self.replace(items)

    @property
    def items(self) -> tuple[Duration, ...]:
        return self._items

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Duration]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"SessionSequence(items={list(map(str, self._items))}, cursor={self._cursor})"

    def current(self) -> Duration:
        """Return the Duration at the cursor."""
        return self._items[self._cursor]

    def advance(self) -> Duration:
        """Move the cursor forward (wrapping) and return the new current item."""
        self._cursor = (self._cursor + 1) % len(self._items)
        return self.current()

    def replace(self, items: Iterable[Duration]) -> None:
        """Replace all items and reset the cursor to 0.

        Raises:
            ValidationError: If *items* is empty. The sequence is unchanged.
        """
        new_items = tuple(items)
        if not new_items:
            raise ValidationError("Session sequence cannot be empty")
        self._items = new_items
        self._cursor = 0

    def reset_cursor(self) -> None:
        self._cursor = 0

    def restore_cursor(self, index: int) -> None:
        """Set the cursor directly (rehydration only).

        Raises:
            ValidationError: If *index* is outside ``[0, len)``.
        """
        if not 0 <= index < len(self._items):
            msg = f"Cursor {index} out of range for {len(self._items)} sessions"
            raise ValidationError(msg)
        self._cursor = index

    def peek_next(self, kind: SessionKind | None = None) -> Duration | None:
        """Return the next item after the cursor without moving it.

        With *kind*, return the next item of that kind, scanning one full
        loop (the current item is checked last). Returns None when no item
        of *kind* exists.
        """
        size = len(self._items)
        for step in range(1, size + 1):
            candidate = self._items[(self._cursor + step) % size]
            if kind is None or candidate.kind == kind:
                return candidate
        return None
