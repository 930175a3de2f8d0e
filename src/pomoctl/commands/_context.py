"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed down via
``@click.pass_obj``. The workspace and timer service are built lazily so
``--help`` and ``--version`` never open the state database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pomoctl.config.logging import bind_invocation, configure_logging, get_event_logger
from pomoctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from pomoctl.config.settings import PomoSettings
    from pomoctl.infrastructure.workspace import Workspace
    from pomoctl.services.result import ServiceResult
    from pomoctl.services.timer import TimerService


class AppContext:
    """State shared by every subcommand of one invocation."""

    def __init__(self, settings: PomoSettings, command: str | None = None) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None
        self._timer: TimerService | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        bind_invocation(command=command, policy=settings.effective_policy)
        self._log = get_event_logger("pomoctl.commands")

    @property
    def workspace(self) -> Workspace:
        if self._workspace is None:
            from pomoctl.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    @property
    def timer(self) -> TimerService:
        """The timer service, rehydrated from the store on first access."""
        if self._timer is None:
            from pomoctl.services.timer import TimerService

            self._timer = TimerService(self.workspace)
        return self._timer

    def close(self) -> None:
        if self._workspace is not None:
            self._workspace.close()
            self._workspace = None
            self._timer = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: payload to stdout. Warnings go to stderr unless
          ``--json`` is set, where they are already in the payload.
        * Failure: payload to stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        self._log.debug("command_result", op=result.op, ok=result.ok, warnings=len(result.warnings))
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
