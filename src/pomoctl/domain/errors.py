"""Error kinds raised by the timer core.

All errors are local and recoverable: an operation that raises one of
these has not mutated any state.
"""

from __future__ import annotations


class PomoError(Exception):
    """Base class for every pomoctl domain error."""

    code = "POMO_ERROR"


class ValidationError(PomoError):
    """A value violates a domain invariant (empty sequence, bad range)."""

    code = "INVALID_VALUE"


class ParseError(PomoError):
    """Custom-flow text does not match the flow grammar.

    Attributes:
        text: The offending input, verbatim.
        reason: Human-readable description of what is wrong.
    """

    code = "INVALID_FLOW"

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        shown = text if len(text) <= 60 else f"{text[:57]}..."
        super().__init__(f"{reason}: {shown!r}")


class InvalidTransition(PomoError):
    """An operation was called in a state where it does not apply."""

    code = "INVALID_TRANSITION"

    def __init__(self, op: str, state: str) -> None:
        self.op = op
        self.state = state
        super().__init__(f"Cannot {op} while {state}")
