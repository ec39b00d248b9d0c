"""Validation pass — run every filter and collect an error report.

INVARIANT: per-field cast failures never escape this module. Each one
becomes a :class:`FieldError`; only structural misuse (inputs that are not
a mapping) raises.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from intercast.domain.casting import cast
from intercast.domain.errors import CastError, InputError
from intercast.domain.filter_set import FilterSet
from intercast.domain.types import ErrorKind

logger = logging.getLogger(__name__)

MISSING_MESSAGE = "is required"


def error_message(kind: ErrorKind, type_name: str | None) -> str:
    """Default human message for a failure of *kind*."""
    if kind is ErrorKind.MISSING:
        return MISSING_MESSAGE
    return f"is not a valid {type_name or 'value'}"


class FieldError(BaseModel):
    """One failed attribute in an :class:`ErrorReport`.

    Attributes:
        attribute: Top-level attribute name.
        path: Path to the failing value (``tags[2]``, ``address.zip``).
            For composites this is the first nested failure.
        kind: ``missing`` or ``invalid``.
        message: Human message without the path prefix.
        type: Human type name of the offending filter (invalid only).
        nested: Every nested failure of a composite attribute.
    """

    model_config = {"frozen": True}

    attribute: str
    path: str
    kind: ErrorKind
    message: str
    type: str | None = None
    nested: tuple[FieldError, ...] = ()

    @property
    def full_message(self) -> str:
        return f"{self.path} {self.message}"


class ErrorReport(BaseModel):
    """Ordered per-attribute failures from one validation run."""

    model_config = {"frozen": True}

    errors: tuple[FieldError, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def count(self) -> int:
        return len(self.errors)

    def attributes(self) -> list[str]:
        return [error.attribute for error in self.errors]

    def for_attribute(self, name: str) -> FieldError | None:
        return next((e for e in self.errors if e.attribute == name), None)

    def full_messages(self) -> list[str]:
        return [error.full_message for error in self.errors]

    def leaves(self) -> list[FieldError]:
        """Flatten composite entries into their nested failures."""
        found: list[FieldError] = []
        for error in self.errors:
            found.extend(error.nested or (error,))
        return found


def _leaf_error(attribute: str, exc: CastError) -> FieldError:
    return FieldError(
        attribute=attribute,
        path=exc.path,
        kind=exc.kind,
        message=error_message(exc.kind, exc.type_name),
        type=exc.type_name if exc.kind is ErrorKind.INVALID else None,
    )


def field_error(attribute: str, exc: CastError) -> FieldError:
    """Convert a cast failure for *attribute* into a report entry."""
    if not exc.nested:
        return _leaf_error(attribute, exc)
    nested = tuple(_leaf_error(attribute, leaf) for leaf in exc.leaves())
    first = nested[0]
    return FieldError(
        attribute=attribute,
        path=first.path,
        kind=ErrorKind.INVALID,
        message=first.message,
        type=first.type or exc.type_name,
        nested=nested,
    )


def cast_inputs(filters: FilterSet, inputs: Any) -> tuple[dict[str, Any], ErrorReport]:
    """Cast every filter against *inputs*.

    Returns:
        ``(values, report)`` where *values* holds the cast value of each
        filter, or the raw input when casting failed.

    Raises:
        InputError: *inputs* is not a mapping.
    """
    if not isinstance(inputs, Mapping):
        msg = f"inputs must be a mapping, not {type(inputs).__name__}"
        raise InputError(msg)

    values: dict[str, Any] = {}
    errors: list[FieldError] = []
    for flt in filters:
        raw = inputs.get(flt.name)
        try:
            values[flt.name] = cast(flt, raw)
        except CastError as exc:
            values[flt.name] = raw
            errors.append(field_error(flt.name, exc))

    logger.debug("Validated %d filters with %d errors", len(filters), len(errors))
    return values, ErrorReport(errors=tuple(errors))


def validate(filters: FilterSet, inputs: Any) -> ErrorReport:
    """Return the error report for *inputs*; empty when everything casts."""
    _, report = cast_inputs(filters, inputs)
    return report
