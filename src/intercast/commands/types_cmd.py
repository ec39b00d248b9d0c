"""``intercast types`` — list registered filter types."""

from __future__ import annotations

import click

from intercast.commands._context import AppContext
from intercast.services.check import list_types


@click.command("types")
@click.pass_obj
def types_cmd(app: AppContext) -> None:
    """List filter type tags, including plugin-provided ones."""
    app.emit(list_types())
