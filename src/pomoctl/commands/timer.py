"""Commands: timer control (status, toggle, start, pause, reset, skip, tick, run)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pomoctl.commands._base import PomoCommand

if TYPE_CHECKING:
    from pomoctl.commands._context import AppContext


@click.command(
    cls=PomoCommand,
    examples="""\
  pomoctl status
  pomoctl --json status
  pomoctl -q status""",
)
@click.pass_obj
def status(app: AppContext) -> None:
    """Show the countdown label, state, flow position and counters."""
    app.emit(app.timer.status())


@click.command(
    cls=PomoCommand,
    examples="""\
  pomoctl toggle
  pomoctl -q toggle""",
)
@click.pass_obj
def toggle(app: AppContext) -> None:
    """Pause a running timer, otherwise start it."""
    app.emit(app.timer.toggle())


@click.command(cls=PomoCommand)
@click.pass_obj
def start(app: AppContext) -> None:
    """Start or resume the current session."""
    app.emit(app.timer.start())


@click.command(cls=PomoCommand)
@click.pass_obj
def pause(app: AppContext) -> None:
    """Pause the running session."""
    app.emit(app.timer.pause())


@click.command(cls=PomoCommand)
@click.pass_obj
def reset(app: AppContext) -> None:
    """Stop and rewind the flow to its first session."""
    app.emit(app.timer.reset())


@click.command(
    cls=PomoCommand,
    examples="""\
  pomoctl skip
  pomoctl --json skip""",
)
@click.pass_obj
def skip(app: AppContext) -> None:
    """Jump to the next session without counting a cycle."""
    app.emit(app.timer.skip())


@click.command(
    cls=PomoCommand,
    examples="""\
  pomoctl tick
  pomoctl tick -n 60
  pomoctl --policy interactive tick -n 1501""",
)
@click.option(
    "-n",
    "--count",
    type=int,
    default=1,
    show_default=True,
    help="Number of one-second ticks to deliver.",
)
@click.pass_obj
def tick(app: AppContext, count: int) -> None:
    """Deliver ticks immediately, without waiting."""
    app.emit(app.timer.tick(count))


@click.command(
    cls=PomoCommand,
    examples="""\
  pomoctl run
  pomoctl run --max-ticks 300
  pomoctl --policy interactive run""",
)
@click.option(
    "--max-ticks",
    type=click.IntRange(min=0),
    default=None,
    help="Stop after this many ticks (default: until interrupted).",
)
@click.option(
    "--interval",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds between ticks (default: [timer] tick_interval).",
)
@click.pass_obj
def run(app: AppContext, max_ticks: int | None, interval: float | None) -> None:
    """Run the timer in the foreground. Ctrl+C pauses and exits."""
    from pomoctl.infrastructure.ticker import Ticker

    if not (app.settings.json_output or app.settings.quiet):
        from pomoctl.plugins.builtins.live_label import LiveLabelPlugin

        app.workspace.plugin_manager.register_plugin(LiveLabelPlugin(), name="live-label")

    ticker = Ticker(app.settings.timer.tick_interval if interval is None else interval)
    result = app.timer.run(ticker, max_ticks=max_ticks)
    if not (app.settings.json_output or app.settings.quiet):
        click.echo("", err=True)
    app.emit(result)
