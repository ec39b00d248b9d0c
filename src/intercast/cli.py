"""Root CLI group for intercast with global flags and command registration."""

from __future__ import annotations

import click

from intercast import __version__
from intercast.commands import register_commands
from intercast.commands._context import AppContext
from intercast.config.settings import IntercastSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="intercast")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--time-zone", default=None, help="Time zone for 'time' filters.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    time_zone: str | None,
) -> None:
    """intercast — cast and validate interaction inputs."""
    ctx.ensure_object(dict)
    # Unset flags must not mask values from env vars or intercast.toml.
    flags = {
        name: value
        for name, value in {
            "json_output": json_output,
            "verbose": verbose,
            "log_json": log_json,
        }.items()
        if value
    }
    try:
        settings = IntercastSettings.from_cli(
            config_path=config_path,
            time_zone=time_zone,
            **flags,
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
