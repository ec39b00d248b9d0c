"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from intercast.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from intercast.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="ic.ok"), Text(f"  {result.op}", style="ic.op"))


def _field(console: Console, key: str, value: Any) -> None:
    if isinstance(value, dict | list):
        value = json.dumps(value, separators=(",", ":"), default=str)
    console.print(Text(f"  {key}: ", style="ic.key"), Text(str(value)))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text("ERROR", style="ic.error"), Text(f"  {result.op}", style="ic.op"), " — ", msg)
    if not err:
        return

    errors = err.detail.get("errors")
    if errors:
        _render_field_errors(console, errors, verbose=verbose)
    elif verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


def _render_field_errors(
    console: Console, errors: list[dict[str, Any]], *, verbose: bool = False
) -> None:
    """One row per failed attribute; nested failures follow in verbose mode."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Path", style="ic.path")
    table.add_column("Kind")
    table.add_column("Message")
    for error in errors:
        rows = error.get("nested") if verbose and error.get("nested") else [error]
        for row in rows:
            kind = str(row["kind"])
            table.add_row(row["path"], Text(kind, style=style_for_kind(kind)), row["message"])
    console.print(table)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "target", result.data["target"])
    for name, value in result.data.get("inputs", {}).items():
        _field(console, name, value)


def _render_filters(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "target", result.data["target"])
    if result.data.get("desc"):
        _field(console, "desc", result.data["desc"])

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Name", style="ic.name")
    table.add_column("Type", style="ic.type")
    table.add_column("Options")

    def add_rows(filters: list[dict[str, Any]], indent: int) -> None:
        for flt in filters:
            options = ", ".join(f"{k}={v}" for k, v in flt["options"].items())
            table.add_row(" " * indent + flt["name"], flt["type"], options)
            add_rows(flt["children"], indent + 2)

    add_rows(result.data["filters"], 0)
    console.print(table)


def _render_types(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Tag", style="ic.type")
    table.add_column("Name")
    table.add_column("Options")
    for rule in result.data["types"]:
        table.add_row(rule["tag"], rule["name"], ", ".join(rule["options"]))
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "check": _render_check,
    "filters": _render_filters,
    "types": _render_types,
}
