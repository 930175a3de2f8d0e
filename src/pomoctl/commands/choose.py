"""Command: resolve the post-expiry choice under the interactive policy."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pomoctl.commands._base import PomoCommand
from pomoctl.domain.lifecycle import Choice

if TYPE_CHECKING:
    from pomoctl.commands._context import AppContext


@click.command(
    cls=PomoCommand,
    examples="""\
  pomoctl choose keep-going
  pomoctl choose take-break
  pomoctl choose stop""",
)
@click.argument("choice", type=click.Choice([c.value for c in Choice]))
@click.pass_obj
def choose(app: AppContext, choice: str) -> None:
    """Answer "Time's up!": keep working, take a break, or stop."""
    app.emit(app.timer.choose(Choice(choice)))
