"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Applies logging and time zone settings, loads
plugins, and centralizes result emission (stdout/stderr routing and
exit codes).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from intercast.config.logging import configure_logging
from intercast.domain.zone import set_default_time_zone
from intercast.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from intercast.config.settings import IntercastSettings
    from intercast.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: IntercastSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        set_default_time_zone(settings.casting.time_zone)
        self.plugin_names: list[str] = []
        if settings.plugins.enabled:
            from intercast.plugins.manager import PluginManager

            self.plugin_names = PluginManager().discover_and_load()
            logger.debug("Loaded plugins: %s", self.plugin_names)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout; warnings go to stderr outside JSON mode.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
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
