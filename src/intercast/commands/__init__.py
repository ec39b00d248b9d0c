"""Subcommand modules for intercast.

Provides register_commands() which uses deferred imports to keep
``intercast --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from intercast.commands.check import check
    from intercast.commands.filters import filters
    from intercast.commands.types_cmd import types_cmd

    cli.add_command(check)
    cli.add_command(filters)
    cli.add_command(types_cmd)
