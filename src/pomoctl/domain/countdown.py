"""CountdownClock — the tick-driven countdown state machine.

Each ``tick()`` applies exactly one step, evaluated in fixed order:

1. seconds > 0: decrement seconds.
2. minutes > 0: borrow a minute (``m:00`` becomes ``(m-1):59``).
3. both zero: the clock is expired and reports ``EXPIRED``.

Remaining time never goes negative. A tick delivered while the clock is
not running is ignored rather than rejected, so an imprecise external
tick source (a tick landing just after ``pause()``) is harmless.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from pomoctl.domain.errors import ValidationError
from pomoctl.domain.session import Duration, SessionKind

logger = logging.getLogger(__name__)


class ClockStatus(StrEnum):
    """Run status of the countdown."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    EXPIRED = "expired"


class TickResult(StrEnum):
    """Outcome of a single ``tick()``."""

    DECREMENTED = "decremented"
    EXPIRED = "expired"
    IGNORED = "ignored"


def format_label(minutes: int, seconds: int, kind: SessionKind) -> str:
    """Format the notification label, e.g. ``"05:00 - Break"``."""
    return f"{minutes:02d}:{seconds:02d} - {kind.label}"


class CountdownClock:
    """Remaining minutes/seconds plus run status."""

    def __init__(self) -> None:
        self._minutes = 0
        self._seconds = 0
        self._status = ClockStatus.IDLE

    @property
    def remaining_minutes(self) -> int:
        return self._minutes

    @property
    def remaining_seconds(self) -> int:
        return self._seconds

    @property
    def status(self) -> ClockStatus:
        return self._status

    @property
    def total_seconds(self) -> int:
        return self._minutes * 60 + self._seconds

    def __repr__(self) -> str:
        return f"CountdownClock({self._minutes:02d}:{self._seconds:02d}, {self._status})"

    def label(self, kind: SessionKind) -> str:
        return format_label(self._minutes, self._seconds, kind)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def reset(self, duration: Duration) -> None:
        """Load *duration* at ``m:00`` and return to idle."""
        self._minutes = duration.minutes
        self._seconds = 0
        self._status = ClockStatus.IDLE

    def start(self) -> None:
        """Run from idle or paused. No-op when running or expired."""
        if self._status in (ClockStatus.IDLE, ClockStatus.PAUSED):
            self._status = ClockStatus.RUNNING

    def pause(self) -> None:
        """Pause a running clock. No-op otherwise."""
        if self._status == ClockStatus.RUNNING:
            self._status = ClockStatus.PAUSED

    def tick(self) -> TickResult:
        """Apply one second of countdown."""
        if self._status != ClockStatus.RUNNING:
            logger.debug("Tick ignored while %s", self._status)
            return TickResult.IGNORED

        if self._seconds > 0:
            self._seconds -= 1
        elif self._minutes > 0:
            self._minutes -= 1
            self._seconds = 59
        else:
            self._status = ClockStatus.EXPIRED
            return TickResult.EXPIRED
        return TickResult.DECREMENTED

    def restore(self, minutes: int, seconds: int, status: ClockStatus) -> None:
        """Set raw clock state (rehydration only).

        Raises:
            ValidationError: If the values break a clock invariant.
        """
        if minutes < 0 or not 0 <= seconds <= 59:
            raise ValidationError(f"Invalid remaining time {minutes}:{seconds}")
        if status == ClockStatus.EXPIRED and (minutes, seconds) != (0, 0):
            raise ValidationError("An expired clock must read 00:00")
        self._minutes = minutes
        self._seconds = seconds
        self._status = status
