"""``intercast filters`` — list the declared filters of an interaction."""

from __future__ import annotations

import click

from intercast.commands._base import IntercastCommand
from intercast.commands._context import AppContext
from intercast.services.check import describe_filters

_EXAMPLES = """\
  intercast filters billing.interactions:ChargeCard
  intercast --json filters billing.interactions:ChargeCard"""


@click.command(cls=IntercastCommand, examples=_EXAMPLES)
@click.argument("target")
@click.pass_obj
def filters(app: AppContext, target: str) -> None:
    """Show the filters declared by TARGET (module:Class)."""
    app.emit(describe_filters(target))
