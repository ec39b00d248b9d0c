"""Rich Console factory and theme for intercast output.

Consoles render to a StringIO buffer so renderers keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich
disables color codes automatically.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

INTERCAST_THEME = Theme(
    {
        "ic.ok": "bold green",
        "ic.error": "bold red",
        "ic.warning": "bold yellow",
        "ic.op": "bold cyan",
        "ic.key": "dim",
        "ic.name": "bold",
        "ic.type": "blue",
        "ic.path": "bold magenta",
        "ic.kind.missing": "yellow",
        "ic.kind.invalid": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=INTERCAST_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for an error kind."""
    return f"ic.kind.{kind}" if kind in ("missing", "invalid") else ""
