"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns the SchemaService and the result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cssderive.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from cssderive.config.settings import CssDeriveSettings
    from cssderive.services.result import ServiceResult
    from cssderive.services.schema import SchemaService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The service (and with it plugin discovery) is created on first use,
    so ``--help`` and ``--version`` never load plugins.
    """

    def __init__(self, settings: CssDeriveSettings) -> None:
        self.settings = settings
        self._service: SchemaService | None = None

        from cssderive.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def service(self) -> SchemaService:
        if self._service is None:
            from cssderive.services.schema import SchemaService

            self._service = SchemaService(self.settings)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output *result*.

        * Success: stdout.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
