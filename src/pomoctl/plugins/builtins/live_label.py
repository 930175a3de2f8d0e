"""Built-in live label plugin used by ``pomoctl run``.

Rewrites one line on stderr with the current ``MM:SS - Kind`` label on
every update, and prints "Time's up!" when a session expires.
"""

from __future__ import annotations

from typing import TextIO

import click

from pomoctl.plugins.hookspecs import hookimpl


class LiveLabelPlugin:
    """Echo each label update in place."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.updates = 0

    @hookimpl
    def pomoctl_update(self, label: str, kind: str) -> None:
        self.updates += 1
        click.echo(f"\r{label}", nl=False, err=True, file=self._stream)

    @hookimpl
    def pomoctl_expired(self, kind: str, muted: bool, volume: int) -> None:
        click.echo(f"\rTime's up! ({kind} finished)", err=True, file=self._stream)
