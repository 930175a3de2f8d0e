"""Command group: expiry sound preference (mute, unmute, volume)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pomoctl.commands._base import PomoGroup

if TYPE_CHECKING:
    from pomoctl.commands._context import AppContext

_SOUND_EXAMPLES = """\
  pomoctl sound mute
  pomoctl sound unmute
  pomoctl sound volume 80
  pomoctl sound volume 0"""


@click.group(cls=PomoGroup, examples=_SOUND_EXAMPLES)
def sound() -> None:
    """Control the sound played when a session ends."""


@sound.command()
@click.pass_obj
def mute(app: AppContext) -> None:
    """Silence expiry notifications."""
    app.emit(app.timer.set_muted(True))


@sound.command()
@click.pass_obj
def unmute(app: AppContext) -> None:
    """Re-enable expiry notifications."""
    app.emit(app.timer.set_muted(False))


@sound.command()
@click.argument("level", type=int)
@click.pass_obj
def volume(app: AppContext, level: int) -> None:
    """Set the volume from 0 to 100. Zero also mutes."""
    app.emit(app.timer.set_volume(level))
