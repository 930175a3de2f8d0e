"""Rich Console factory and theme for pomoctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

POMO_THEME = Theme(
    {
        "pomo.ok": "bold green",
        "pomo.error": "bold red",
        "pomo.warning": "bold yellow",
        "pomo.op": "bold cyan",
        "pomo.key": "dim",
        "pomo.label": "bold",
        "pomo.current": "reverse bold",
        "pomo.kind.work": "red",
        "pomo.kind.break": "green",
        "pomo.state.running": "green",
        "pomo.state.paused": "yellow",
        "pomo.state.idle": "dim",
        "pomo.state.awaiting_choice": "bold magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=POMO_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a session kind."""
    return f"pomo.kind.{kind}" if kind in ("work", "break") else ""


def style_for_state(state: str) -> str:
    """Return the Rich style name for a scheduler state."""
    return f"pomo.state.{state}"
