"""Click base classes with an ``--examples`` flag.

``PomoCommand`` and ``PomoGroup`` take an ``examples`` string. Passing
``--examples`` prints it and exits, so ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


def _examples_callback(examples: str) -> Any:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    return show


def attach_examples(cmd: click.Command, examples: str | None) -> None:
    """Give *cmd* an eager ``--examples`` flag when *examples* is non-empty."""
    if not examples:
        return
    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=_examples_callback(examples),
            help="Show usage examples.",
        )
    )


class PomoCommand(click.Command):
    """Command accepting ``examples=`` in its decorator."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        attach_examples(self, examples)


class PomoGroup(click.Group):
    """Group accepting ``examples=``; its subcommands default to PomoCommand."""

    command_class = PomoCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        attach_examples(self, examples)
