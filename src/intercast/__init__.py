"""intercast — typed interaction inputs with a filter-based casting engine."""

from intercast.domain.casting import cast
from intercast.domain.errors import (
    AmbiguousImportError,
    DefinitionError,
    InputError,
    IntercastError,
    InvalidInteractionError,
    InvalidValueError,
    MissingValueError,
    ReservedInputError,
)
from intercast.domain.filter_set import FilterSet
from intercast.domain.filters import Filter, build_filter
from intercast.domain.registry import TypeRule, get_type_rule, register_type
from intercast.domain.types import ErrorKind, FilterType
from intercast.domain.validation import ErrorReport, FieldError, cast_inputs, validate
from intercast.domain.zone import use_time_zone
from intercast.interaction import Errors, Input, Interaction

__version__ = "0.4.0"

__all__ = [
    "AmbiguousImportError",
    "DefinitionError",
    "ErrorKind",
    "ErrorReport",
    "Errors",
    "FieldError",
    "Filter",
    "FilterSet",
    "FilterType",
    "Input",
    "InputError",
    "IntercastError",
    "Interaction",
    "InvalidInteractionError",
    "InvalidValueError",
    "MissingValueError",
    "ReservedInputError",
    "TypeRule",
    "__version__",
    "build_filter",
    "cast",
    "cast_inputs",
    "get_type_rule",
    "register_type",
    "use_time_zone",
    "validate",
]
