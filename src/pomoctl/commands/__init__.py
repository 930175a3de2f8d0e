"""Subcommand modules for pomoctl.

Provides register_commands(), which imports command modules inside the
function so importing :mod:`pomoctl.cli` stays cheap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from pomoctl.commands.cycles import cycles
    from pomoctl.commands.flow import flow
    from pomoctl.commands.sound import sound

    cli.add_command(flow)
    cli.add_command(cycles)
    cli.add_command(sound)

    # --- Standalone commands ---
    from pomoctl.commands.choose import choose
    from pomoctl.commands.timer import pause, reset, run, skip, start, status, tick, toggle

    for command in (status, toggle, start, pause, reset, skip, tick, run, choose):
        cli.add_command(command)
