"""Command group: session flow (show, set)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pomoctl.commands._base import PomoGroup
from pomoctl.domain.flow import FLOW_FORMAT_HINT

if TYPE_CHECKING:
    from pomoctl.commands._context import AppContext

_FLOW_EXAMPLES = """\
  pomoctl flow show
  pomoctl flow set "25w 5b 25w 5b 25w 30b"
  pomoctl flow set "50w 10b"
  pomoctl --json flow show"""


@click.group(cls=PomoGroup, examples=_FLOW_EXAMPLES)
def flow() -> None:
    """Inspect or replace the session flow."""


@flow.command()
@click.pass_obj
def show(app: AppContext) -> None:
    """List the flow with the current session marked."""
    app.emit(app.timer.flow_show())


@flow.command(
    "set",
    examples="""\
  pomoctl flow set "25w 5b 25w 5b 25w 30b"
  pomoctl flow set "90w 20b"
  pomoctl flow set 1w 1b""",
    epilog=FLOW_FORMAT_HINT,
)
@click.argument("text", nargs=-1, required=True)
@click.pass_obj
def set_flow(app: AppContext, text: tuple[str, ...]) -> None:
    """Replace the flow and reset to its first session."""
    app.emit(app.timer.flow_set(" ".join(text)))
