"""Root CLI group for pomoctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from pomoctl import __version__
from pomoctl.commands import register_commands
from pomoctl.commands._context import AppContext
from pomoctl.config.settings import PomoSettings
from pomoctl.domain.lifecycle import AdvancePolicy


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pomoctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--state-dir",
    "state_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the .pomoctl state (default: config dir or CWD).",
)
@click.option(
    "--policy",
    type=click.Choice([p.value for p in AdvancePolicy]),
    default=None,
    help="What happens when a session ends (overrides [timer] policy).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    state_root: Path | None,
    policy: str | None,
) -> None:
    """pomoctl — Pomodoro timer with a configurable session flow."""
    settings = PomoSettings.from_cli(
        config_path=config_path,
        state_root=state_root,
        json_output=json_output or None,
        quiet=quiet or None,
        verbose=verbose or None,
        log_json=log_json or None,
        policy=policy,
    )
    app = AppContext(settings, command=ctx.invoked_subcommand)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
