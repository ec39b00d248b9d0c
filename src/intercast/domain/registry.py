"""Type registry — maps type tags to their casting rules.

Every filter resolves its tag here exactly once, at construction time.
Built-in tags are registered at import time; plugins add new tags through
:func:`register_type` (see :mod:`intercast.plugins.hookspecs`).
Built-in names are reserved and cannot be overridden.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from intercast.domain import casting
from intercast.domain.errors import DefinitionError
from intercast.domain.types import FilterType

if TYPE_CHECKING:
    from intercast.domain.filters import Filter

logger = logging.getLogger(__name__)

Caster = Callable[["Filter", Any, str], Any]

COMMON_OPTIONS: frozenset[str] = frozenset({"default"})


@dataclass(frozen=True)
class TypeRule:
    """Casting behaviour bound to one type tag.

    Attributes:
        tag: Type tag used in declarations (e.g. ``"integer"``).
        human_name: Name used in error messages (``"is not a valid integer"``).
        caster: Coercion function ``(filter, value, path) -> value``.
        classes: Host types every cast value must be an instance of.
            Empty means the caster performs its own instance check.
        options: Recognized option keys besides ``default``.
        required: Option keys that must be supplied.
        composite: Whether the filter owns child filters.
        single_child: Composite with at most one (unnamed) child.
    """

    tag: str
    human_name: str
    caster: Caster
    classes: tuple[type, ...] = ()
    options: frozenset[str] = frozenset()
    required: frozenset[str] = frozenset()
    composite: bool = False
    single_child: bool = False

    @property
    def allowed_options(self) -> frozenset[str]:
        return self.options | COMMON_OPTIONS


TYPE_REGISTRY: dict[str, TypeRule] = {}


def get_type_rule(tag: str) -> TypeRule:
    """Return the rule for *tag* or raise :class:`DefinitionError`."""
    rule = TYPE_REGISTRY.get(str(tag))
    if rule is None:
        msg = f"Unknown filter type: {tag!r}"
        raise DefinitionError(msg)
    return rule


def registered_types() -> list[TypeRule]:
    """Return all registered rules in registration order."""
    return list(TYPE_REGISTRY.values())


def register_type(rule: TypeRule) -> None:
    """Register a custom filter type.

    The tag must be non-empty and must not collide with an existing
    registration.
    """
    tag = rule.tag.strip()
    if not tag:
        msg = "Filter type tag must not be empty"
        raise ValueError(msg)
    if tag != rule.tag:
        msg = f"Filter type tag {rule.tag!r} must not contain surrounding whitespace"
        raise ValueError(msg)
    if not callable(rule.caster):
        msg = f"Filter type {tag!r} must provide a callable caster"
        raise TypeError(msg)
    if tag in TYPE_REGISTRY:
        msg = f"Filter type {tag!r} is already registered"
        raise ValueError(msg)
    if not rule.required <= rule.allowed_options:
        msg = f"Filter type {tag!r} requires options it does not recognize"
        raise ValueError(msg)

    TYPE_REGISTRY[tag] = rule
    logger.debug("Registered filter type: %s", tag)


def unregister_type(tag: str) -> None:
    """Remove a custom filter type. Built-in tags cannot be removed."""
    if tag in set(FilterType):
        msg = f"Built-in filter type {tag!r} cannot be unregistered"
        raise ValueError(msg)
    TYPE_REGISTRY.pop(tag, None)


def _register_builtin_types() -> None:
    """Populate :data:`TYPE_REGISTRY` with the built-in rules."""
    date_options = frozenset({"format"})
    builtins = [
        TypeRule(FilterType.BOOLEAN, "boolean", casting.cast_boolean, (bool,)),
        TypeRule(FilterType.INTEGER, "integer", casting.cast_integer, (int,)),
        TypeRule(FilterType.FLOAT, "float", casting.cast_float, (float,)),
        TypeRule(
            FilterType.DECIMAL,
            "decimal",
            casting.cast_decimal,
            (Decimal,),
            options=frozenset({"digits"}),
        ),
        TypeRule(
            FilterType.STRING,
            "string",
            casting.cast_string,
            (str,),
            options=frozenset({"strip"}),
        ),
        TypeRule(FilterType.SYMBOL, "symbol", casting.cast_symbol, (str,)),
        TypeRule(FilterType.DATE, "date", casting.cast_date, (date,), options=date_options),
        TypeRule(
            FilterType.DATETIME,
            "date and time",
            casting.cast_datetime,
            (datetime,),
            options=date_options,
        ),
        TypeRule(FilterType.TIME, "time", casting.cast_time, (datetime,), options=date_options),
        TypeRule(
            FilterType.ARRAY,
            "array",
            casting.cast_array,
            (list,),
            composite=True,
            single_child=True,
        ),
        TypeRule(
            FilterType.HASH,
            "hash",
            casting.cast_hash,
            (dict,),
            options=frozenset({"strip"}),
            composite=True,
        ),
        TypeRule(
            FilterType.MODEL,
            "model",
            casting.cast_model,
            options=frozenset({"class_"}),
            required=frozenset({"class_"}),
        ),
        TypeRule(FilterType.FILE, "file", casting.cast_file),
        TypeRule(
            FilterType.INTERFACE,
            "interface",
            casting.cast_interface,
            options=frozenset({"methods"}),
            required=frozenset({"methods"}),
        ),
    ]
    for rule in builtins:
        TYPE_REGISTRY[str(rule.tag)] = rule


_register_builtin_types()
