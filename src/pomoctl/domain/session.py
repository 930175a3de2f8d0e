"""Session kinds and the Duration value type.

A Duration is one Work or Break span in whole minutes. It is immutable
once constructed; a 0-minute Duration is legal and expires on the next
tick evaluation.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class SessionKind(StrEnum):
    """Kind of a session in a flow."""

    WORK = "work"
    BREAK = "break"

    @property
    def label(self) -> str:
        """Display label used in notifications (``"Work"`` / ``"Break"``)."""
        return self.value.capitalize()

    @property
    def marker(self) -> str:
        """Single-character flow marker (``w`` / ``b``)."""
        return self.value[0]


class Duration(BaseModel):
    """One session span: whole minutes tagged by kind."""

    model_config = {"frozen": True}

    minutes: int = Field(ge=0)
    kind: SessionKind

    @classmethod
    def work(cls, minutes: int) -> Duration:
        return cls(minutes=minutes, kind=SessionKind.WORK)

    @classmethod
    def rest(cls, minutes: int) -> Duration:
        return cls(minutes=minutes, kind=SessionKind.BREAK)

    def __str__(self) -> str:
        return f"{self.minutes}{self.kind.marker}"
