"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides the marker service and centralized result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lanemark.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from datetime import datetime

    from lanemark.config.settings import LanemarkSettings
    from lanemark.services.base import Clock
    from lanemark.services.marking import MarkerService
    from lanemark.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.
    """

    def __init__(self, settings: LanemarkSettings, clock: Clock | None = None) -> None:
        self.settings = settings
        self._clock = clock
        self._service: MarkerService | None = None

        from lanemark.config.logging import bind_board, configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        bind_board(settings.board.name)

    @property
    def service(self) -> MarkerService:
        """The marker service (created lazily on first access)."""
        if self._service is None:
            from lanemark.services.marking import MarkerService

            self._service = MarkerService(self.settings, clock=self._clock)
        return self._service

    def service_at(self, at: datetime | None) -> MarkerService:
        """A marker service whose clock is pinned to *at* (``--at``), if given."""
        if at is None:
            return self.service
        from lanemark.services.marking import MarkerService

        return MarkerService(self.settings, clock=lambda: at)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
