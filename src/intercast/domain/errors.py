"""Exception hierarchy for filter definition, casting, and input usage.

Definition errors and input errors are programmer mistakes and surface
immediately. Cast errors are per-field data problems: the casting engine
raises them and the validation pass converts them into report entries, so
they never escape :func:`intercast.domain.validation.validate`.
"""

from __future__ import annotations

from intercast.domain.types import ErrorKind


class IntercastError(Exception):
    """Base class for every error raised by intercast."""


class DefinitionError(IntercastError):
    """A filter or filter set was declared incorrectly."""


class AmbiguousImportError(DefinitionError, ValueError):
    """Both ``only`` and ``except_`` were given when importing filters."""


class InputError(IntercastError, TypeError):
    """Top-level inputs were not usable at all (e.g. not a mapping)."""


class ReservedInputError(InputError):
    """An input key uses the reserved internal prefix."""


class CastError(IntercastError):
    """A raw value could not be cast by a filter.

    Attributes:
        path: Attribute path of the failing value (``tags[2]``, ``address.zip``).
        type_name: Human-readable type name of the filter that failed.
        nested: Failures of child values for composite filters.
    """

    kind: ErrorKind

    def __init__(
        self,
        path: str,
        type_name: str | None = None,
        nested: list[CastError] | None = None,
    ) -> None:
        super().__init__(path)
        self.path = path
        self.type_name = type_name
        self.nested = nested or []

    def leaves(self) -> list[CastError]:
        """Return the innermost failures in depth-first order."""
        if not self.nested:
            return [self]
        found: list[CastError] = []
        for child in self.nested:
            found.extend(child.leaves())
        return found


class MissingValueError(CastError):
    """No value was given and the filter has no default."""

    kind = ErrorKind.MISSING


class InvalidValueError(CastError):
    """A value was given but cannot be represented as the filter's type."""

    kind = ErrorKind.INVALID


class InvalidInteractionError(IntercastError):
    """Raised by ``Interaction.run_strict`` when the outcome is invalid."""

    def __init__(self, message: str, errors: object = None) -> None:
        super().__init__(message)
        self.errors = errors
