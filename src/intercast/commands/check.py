"""``intercast check`` — validate a JSON inputs file against an interaction."""

from __future__ import annotations

from pathlib import Path

import click

from intercast.commands._base import IntercastCommand
from intercast.commands._context import AppContext
from intercast.services.check import check_inputs

_EXAMPLES = """\
  intercast check billing.interactions:ChargeCard inputs.json
  intercast --json check billing.interactions:ChargeCard inputs.json
  intercast --time-zone Europe/Berlin check app.jobs:Schedule job.json"""


@click.command(cls=IntercastCommand, examples=_EXAMPLES)
@click.argument("target")
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def check(app: AppContext, target: str, input_file: Path) -> None:
    """Cast INPUT_FILE with the filters of TARGET (module:Class)."""
    app.emit(check_inputs(target, input_file))
