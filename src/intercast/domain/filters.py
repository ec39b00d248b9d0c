"""Filter descriptors — one named, typed input.

A :class:`Filter` is immutable once built. :func:`build_filter` is the only
constructor that validates a declaration: name rules, the type tag, the
option keys and values, and child filters for composite tags. Defaults are
evaluated once at build time so a broken default fails at definition time
instead of on every run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from intercast.domain import casting
from intercast.domain.errors import CastError, DefinitionError
from intercast.domain.filter_set import FilterSet
from intercast.domain.registry import TypeRule, get_type_rule
from intercast.domain.types import is_reserved

logger = logging.getLogger(__name__)


def _empty_options() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Filter:
    """Immutable descriptor for one named input.

    Hashes by name and type only; options and children hold unhashable values.
    """

    name: str
    type: str
    rule: TypeRule = field(repr=False, compare=False)
    options: Mapping[str, Any] = field(default_factory=_empty_options, hash=False)
    children: FilterSet | None = field(default=None, hash=False)

    @property
    def type_name(self) -> str:
        """Human-readable type name for error messages."""
        return self.rule.human_name

    @property
    def has_default(self) -> bool:
        """True when a ``default`` option was supplied, even ``None``."""
        return "default" in self.options

    @property
    def element(self) -> Filter | None:
        """The element filter of an array, if one was declared."""
        if self.children is None or len(self.children) == 0:
            return None
        return next(iter(self.children))

    def default(self) -> Any:
        """Resolve and cast the default value.

        Zero-argument callables are invoked on every call. A ``None`` default
        makes the input optional and resolves to ``None``.

        Raises:
            DefinitionError: No default was declared, or it fails casting.
        """
        if not self.has_default:
            msg = f"Filter {self.name!r} has no default"
            raise DefinitionError(msg)
        value = self.options["default"]
        if callable(value) and not isinstance(value, type):
            value = value()
        if value is None:
            return None
        try:
            return casting.coerce(self, value, self.name)
        except CastError as exc:
            msg = f"Default value for {self.name!r} is not a valid {self.type_name}"
            raise DefinitionError(msg) from exc

    def cast(self, value: Any) -> Any:
        """Cast *value*; see :func:`intercast.domain.casting.cast`."""
        return casting.cast(self, value)


# ---------------------------------------------------------------------------
# Option value checks
# ---------------------------------------------------------------------------


def _check_format(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _check_digits(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _check_strip(value: Any) -> bool:
    return isinstance(value, bool)


def _check_class(value: Any) -> bool:
    return isinstance(value, type) or (isinstance(value, str) and bool(value.strip()))


def _check_methods(value: Any) -> bool:
    if isinstance(value, str) or not isinstance(value, Iterable):
        return False
    methods = list(value)
    return bool(methods) and all(isinstance(m, str) and m for m in methods)


_OPTION_CHECKS: dict[str, Callable[[Any], bool]] = {
    "format": _check_format,
    "digits": _check_digits,
    "strip": _check_strip,
    "class_": _check_class,
    "methods": _check_methods,
}


def _validate_name(name: Any) -> str:
    if not isinstance(name, str) or not name:
        msg = "missing attribute name"
        raise DefinitionError(msg)
    if is_reserved(name):
        msg = f"Attribute name {name!r} is reserved"
        raise DefinitionError(msg)
    if not name.isidentifier():
        msg = f"Attribute name {name!r} is not a valid identifier"
        raise DefinitionError(msg)
    return name


def _validate_options(name: str, rule: TypeRule, options: Mapping[str, Any]) -> dict[str, Any]:
    unknown = sorted(set(options) - rule.allowed_options)
    if unknown:
        msg = f"Unrecognized options for {rule.tag} filter {name!r}: {unknown}"
        raise DefinitionError(msg)
    missing = sorted(rule.required - set(options))
    if missing:
        msg = f"{rule.tag} filter {name!r} requires options: {missing}"
        raise DefinitionError(msg)
    for key, value in options.items():
        check = _OPTION_CHECKS.get(key)
        if check is not None and not check(value):
            msg = f"Invalid value for option {key!r} on filter {name!r}: {value!r}"
            raise DefinitionError(msg)

    normalized = dict(options)
    if "methods" in normalized:
        normalized["methods"] = tuple(normalized["methods"])
    if "class_" in normalized:
        normalized["class_"] = casting.resolve_class(normalized["class_"])
    return normalized


def build_filter(
    name: str,
    type_tag: str,
    options: Mapping[str, Any] | None = None,
    children: Iterable[Filter] = (),
) -> Filter:
    """Validate a declaration and construct its :class:`Filter`.

    Raises:
        DefinitionError: Reserved or empty name, unknown tag, unrecognized
            or malformed option, misplaced children, or a broken default.
    """
    name = _validate_name(name)
    rule = get_type_rule(type_tag)
    validated = _validate_options(name, rule, options or {})

    child_list = list(children)
    child_set: FilterSet | None = None
    if rule.composite:
        if rule.single_child and len(child_list) > 1:
            msg = f"{rule.tag} filter {name!r} accepts at most one element filter"
            raise DefinitionError(msg)
        child_set = FilterSet(child_list)
        child_set.freeze()
    elif child_list:
        msg = f"{rule.tag} filter {name!r} does not accept nested filters"
        raise DefinitionError(msg)

    flt = Filter(
        name=name,
        type=str(rule.tag),
        rule=rule,
        options=MappingProxyType(validated),
        children=child_set,
    )
    if flt.has_default:
        flt.default()
    logger.debug("Declared %s filter %s", flt.type, flt.name)
    return flt
