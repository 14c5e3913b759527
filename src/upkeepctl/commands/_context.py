"""AppContext: shared click context for all commands.

Created once by the root group and handed to subcommands through
``@click.pass_obj``. Owns the lazily built Vault and routes results to
stdout or stderr with the right exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from upkeepctl.output.formatters import OutputSettings, format_result
from upkeepctl.services.result import INVALID_DATE, ServiceResult

if TYPE_CHECKING:
    from datetime import datetime

    from upkeepctl.config.settings import UpkeepSettings
    from upkeepctl.infrastructure.vault import Vault


class AppContext:
    """Shared context flowing through click's command hierarchy.

    The vault is created on first use, so ``--help`` and ``--version``
    never touch the filesystem.
    """

    def __init__(self, settings: UpkeepSettings) -> None:
        self.settings = settings
        self._vault: Vault | None = None

        from upkeepctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from upkeepctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def vault(self) -> Vault:
        """The vault instance (created lazily on first access)."""
        if self._vault is None:
            from upkeepctl.infrastructure.vault import Vault

            self._vault = Vault(self.settings)
        return self._vault

    def parse_now(self, op: str, value: str | None) -> datetime | None:
        """Parse a ``--now`` option; emits ``INVALID_DATE`` and exits when bad."""
        if value is None:
            return None
        from upkeepctl.services._helpers import parse_moment

        try:
            return parse_moment(value)
        except ValueError:
            failure = ServiceResult.failure(
                op,
                INVALID_DATE,
                f"Invalid --now value {value!r}; expected YYYY-MM-DD or an ISO datetime",
                value=value,
            )
        self.emit(failure)
        return None

    def emit(self, result: ServiceResult) -> None:
        """Format and output *result*.

        * Success: stdout; warnings go to stderr unless in JSON mode.
        * Failure: stderr, then exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            locale=self.settings.locale,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
