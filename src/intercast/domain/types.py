"""Filter type tags and error kinds.

The built-in tags form a closed set. Plugins may register additional tags
through :func:`intercast.domain.registry.register_type`; those are plain
strings and never appear in :class:`FilterType`.
"""

from __future__ import annotations

from enum import StrEnum

RESERVED_PREFIX = "_interaction_"


class FilterType(StrEnum):
    """Built-in filter type tags."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    STRING = "string"
    SYMBOL = "symbol"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    ARRAY = "array"
    HASH = "hash"
    MODEL = "model"
    FILE = "file"
    INTERFACE = "interface"


class ErrorKind(StrEnum):
    """Symbolic kind of a per-field validation failure."""

    MISSING = "missing"
    INVALID = "invalid"


def is_reserved(name: str) -> bool:
    """Check whether *name* uses the internal attribute prefix."""
    return str(name).startswith(RESERVED_PREFIX)
