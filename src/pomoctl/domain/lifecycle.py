"""Scheduler lifecycle states, advance policies, and transition map.

The scheduler state is a superset of the clock status: ``awaiting_choice``
models "timer hit zero, ask the operator what's next" and exists only
under the interactive advance policy.
"""

from __future__ import annotations

from enum import StrEnum


class SchedulerState(StrEnum):
    """Orchestrator state exposed to callers."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    AWAITING_CHOICE = "awaiting_choice"


class AdvancePolicy(StrEnum):
    """What happens when a session expires."""

    CONTINUOUS = "continuous"  # auto-advance through the flow
    INTERACTIVE = "interactive"  # stop and wait for resolve_choice()


class Choice(StrEnum):
    """Operator options after an expiry under the interactive policy."""

    KEEP_GOING = "keep-going"
    TAKE_BREAK = "take-break"
    STOP = "stop"


class BreakSource(StrEnum):
    """Where a TakeBreak choice gets its minutes from."""

    FIXED = "fixed"
    SEQUENCE = "sequence"


# --- Transition map ---

SCHEDULER_TRANSITIONS: dict[str, list[str]] = {
    "idle": ["running"],
    "running": ["paused", "idle", "awaiting_choice"],
    "paused": ["running", "idle"],
    "awaiting_choice": ["running", "idle"],
}


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]] = SCHEDULER_TRANSITIONS,
) -> bool:
    """Check if moving from *current* to *target* is allowed.

    Staying in the same state is always allowed.
    """
    if current == target:
        return current in transitions
    return target in transitions.get(current, [])
