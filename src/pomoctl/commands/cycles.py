"""Command group: completed-cycles counter (show, reset)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pomoctl.commands._base import PomoGroup

if TYPE_CHECKING:
    from pomoctl.commands._context import AppContext


@click.group(
    cls=PomoGroup,
    examples="""\
  pomoctl cycles show
  pomoctl cycles reset
  pomoctl -q cycles show""",
)
def cycles() -> None:
    """Inspect or reset the completed-sessions counter."""


@cycles.command()
@click.pass_obj
def show(app: AppContext) -> None:
    """Print how many sessions have expired."""
    app.emit(app.timer.cycles_show())


@cycles.command()
@click.pass_obj
def reset(app: AppContext) -> None:
    """Set the counter back to zero."""
    app.emit(app.timer.cycles_reset())
