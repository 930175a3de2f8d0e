"""Custom-flow parsing: ``"25w 5b 25w 5b 25w 30b"`` to a Duration sequence.

Grammar: one or more tokens separated by one-or-more whitespace
characters. Each token is ``<positive-integer><marker>`` where the marker
is ``w`` (Work) or ``b`` (Break), case-sensitive. Surrounding whitespace
is ignored.

Parsing is all-or-nothing: the whole string is validated before any
Duration is returned, so a partial sequence is never produced.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from pomoctl.domain.errors import ParseError
from pomoctl.domain.session import Duration, SessionKind

DEFAULT_FLOW = "25w 5b 25w 5b 25w 30b"

FLOW_FORMAT_HINT = "use the format '25w 5b 25w 5b 25w 30b'"

# Longest accepted count; keeps int() well inside the str->int digit limit.
MAX_COUNT_DIGITS = 6

FLOW_PATTERN = re.compile(r"[0-9]+[wb](?:\s+[0-9]+[wb])*")
TOKEN_PATTERN = re.compile(r"([0-9]+)([wb])")

_MARKERS: dict[str, SessionKind] = {kind.marker: kind for kind in SessionKind}


def _to_duration(text: str, count: str, marker: str) -> Duration:
    token = f"{count}{marker}"
    digits = count.lstrip("0")
    if len(digits) > MAX_COUNT_DIGITS:
        reason = f"Session length too large in {token[:20]!r}; at most {MAX_COUNT_DIGITS} digits"
        raise ParseError(text, reason)
    minutes = int(digits or "0")
    if minutes <= 0:
        raise ParseError(text, f"Session length must be positive, got {token!r}")
    return Duration(minutes=minutes, kind=_MARKERS[marker])


def parse_flow(text: str) -> tuple[Duration, ...]:
    """Parse custom-flow *text* into an ordered tuple of Durations.

    Raises:
        ParseError: If *text* is empty or any token is malformed. The
            error carries the original text and a readable reason.
    """
    stripped = text.strip()
    if not stripped:
        raise ParseError(text, f"Flow is empty; {FLOW_FORMAT_HINT}")
    if FLOW_PATTERN.fullmatch(stripped) is None:
        raise ParseError(text, f"Invalid flow format; {FLOW_FORMAT_HINT}")
    return tuple(
        _to_duration(text, count, marker) for count, marker in TOKEN_PATTERN.findall(stripped)
    )


def format_flow(items: Iterable[Duration]) -> str:
    """Render Durations back into canonical flow text."""
    return " ".join(str(item) for item in items)
