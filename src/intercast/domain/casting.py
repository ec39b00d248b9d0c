"""Casting engine — coerce raw values into the type a filter declares.

Each built-in tag has exactly one caster function here. Casters receive the
filter, a non-``None`` raw value, and the attribute path used for error
reporting. They return the typed value or raise :class:`InvalidValueError`.
Composite casters recurse through :func:`cast` for their child filters.

INVARIANT: a cast value always passes its tag's representation check.
"""

from __future__ import annotations

import importlib
import io
import math
import sys
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Context, Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING, Any

from dateutil import parser as date_parser

from intercast.domain.errors import (
    CastError,
    DefinitionError,
    InvalidValueError,
    MissingValueError,
)
from intercast.domain.zone import current_time_zone

if TYPE_CHECKING:
    from intercast.domain.filters import Filter

_TRUE_VALUES = frozenset({"true", "1"})
_FALSE_VALUES = frozenset({"false", "0"})


def cast(flt: Filter, value: Any, path: str | None = None) -> Any:
    """Cast *value* with *flt*, resolving defaults for absent values.

    Raises:
        MissingValueError: *value* is None and the filter has no default.
        InvalidValueError: *value* cannot be represented as the filter's type.
    """
    path = path or flt.name
    if value is None:
        if flt.has_default:
            return flt.default()
        raise MissingValueError(path, flt.type_name)
    return coerce(flt, value, path)


def coerce(flt: Filter, value: Any, path: str) -> Any:
    """Run the tag's caster and enforce its representation check."""
    result = flt.rule.caster(flt, value, path)
    if flt.rule.classes and not isinstance(result, flt.rule.classes):
        raise _invalid(flt, path)
    return result


def _invalid(flt: Filter, path: str) -> InvalidValueError:
    return InvalidValueError(path, flt.type_name)


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float | Decimal) and not isinstance(value, bool)


def _parse_decimal(text: str) -> Decimal | None:
    """Parse a finite decimal from *text*, or return None."""
    try:
        number = Decimal(text.strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def cast_boolean(flt: Filter, value: Any, path: str) -> bool:
    if isinstance(value, bool):
        return value
    if type(value) is int and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
    raise _invalid(flt, path)


def cast_integer(flt: Filter, value: Any, path: str) -> int:
    """Cast to int, rejecting anything with a fractional part."""
    if isinstance(value, bool):
        raise _invalid(flt, path)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise _invalid(flt, path)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            parsed = _parse_decimal(value)
            if parsed is None:
                raise _invalid(flt, path) from None
            value = parsed
    if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        return int(value)
    raise _invalid(flt, path)


def cast_float(flt: Filter, value: Any, path: str) -> float:
    """Cast to a finite float."""
    if isinstance(value, str):
        parsed = _parse_decimal(value)
        if parsed is None:
            raise _invalid(flt, path)
        value = parsed
    if _is_number(value):
        try:
            result = float(value)
        except OverflowError:
            raise _invalid(flt, path) from None
        # Decimal -> float overflows to inf silently.
        if math.isfinite(result):
            return result
    raise _invalid(flt, path)


def cast_decimal(flt: Filter, value: Any, path: str) -> Decimal:
    if isinstance(value, str):
        number = _parse_decimal(value)
    elif isinstance(value, Decimal):
        number = value if value.is_finite() else None
    elif isinstance(value, float):
        number = _parse_decimal(repr(value))
    elif _is_number(value):
        number = Decimal(value)
    else:
        number = None
    if number is None:
        raise _invalid(flt, path)

    digits = flt.options.get("digits")
    if digits is not None:
        return Context(prec=digits).create_decimal(number)
    return number


def cast_string(flt: Filter, value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise _invalid(flt, path)
    return value.strip() if flt.options.get("strip", False) else value


def cast_symbol(flt: Filter, value: Any, path: str) -> str:
    """Symbols are interned strings; enum members contribute their name."""
    if isinstance(value, Enum):
        return sys.intern(value.name)
    if isinstance(value, str):
        return sys.intern(value)
    raise _invalid(flt, path)


# ---------------------------------------------------------------------------
# Date / time family
# ---------------------------------------------------------------------------


def _parse_datetime(flt: Filter, text: str, path: str) -> datetime:
    """Parse with the ``format`` option if given, otherwise free-form."""
    fmt = flt.options.get("format")
    try:
        if fmt is not None:
            return datetime.strptime(text, fmt)
        return date_parser.parse(text)
    except (ValueError, OverflowError):
        raise _invalid(flt, path) from None


def _from_timestamp(flt: Filter, value: Any, path: str) -> datetime:
    try:
        return datetime.fromtimestamp(float(value), tz=current_time_zone())
    except (ValueError, OverflowError, OSError):
        raise _invalid(flt, path) from None


def cast_date(flt: Filter, value: Any, path: str) -> date:
    if isinstance(value, datetime):
        raise _invalid(flt, path)
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return _parse_datetime(flt, value, path).date()
    if _is_number(value):
        return _from_timestamp(flt, value, path).date()
    raise _invalid(flt, path)


def cast_datetime(flt: Filter, value: Any, path: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return _parse_datetime(flt, value, path)
    raise _invalid(flt, path)


def cast_time(flt: Filter, value: Any, path: str) -> datetime:
    """Cast to a zone-aware datetime in the active time zone.

    Aware datetimes pass through untouched. Naive values (including parsed
    strings without an offset) are interpreted in the active zone; numbers
    are epoch seconds.
    """
    zone = current_time_zone()
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=zone)
    if isinstance(value, str):
        parsed = _parse_datetime(flt, value, path)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=zone)
        return parsed.astimezone(zone)
    if _is_number(value):
        return _from_timestamp(flt, value, path)
    raise _invalid(flt, path)


# ---------------------------------------------------------------------------
# Composites
# ---------------------------------------------------------------------------


def cast_array(flt: Filter, value: Any, path: str) -> list[Any]:
    """Cast every element against the element filter, if one was declared.

    All element failures are collected before the array is rejected.
    A missing element counts as an invalid element.
    """
    if not isinstance(value, list | tuple):
        raise _invalid(flt, path)
    element = flt.element
    if element is None:
        return list(value)

    result: list[Any] = []
    failures: list[CastError] = []
    for index, item in enumerate(value):
        item_path = f"{path}[{index}]"
        try:
            result.append(cast(element, item, item_path))
        except InvalidValueError as exc:
            failures.append(exc)
        except MissingValueError as exc:
            failures.append(InvalidValueError(exc.path, exc.type_name))
    if failures:
        raise InvalidValueError(path, flt.type_name, failures)
    return result


def cast_hash(flt: Filter, value: Any, path: str) -> dict[str, Any]:
    """Cast declared keys; drop undeclared keys unless ``strip=False``."""
    if not isinstance(value, Mapping) or not all(isinstance(key, str) for key in value):
        raise _invalid(flt, path)

    result: dict[str, Any] = {} if flt.options.get("strip", True) else dict(value)
    failures: list[CastError] = []
    for child in flt.children or ():
        try:
            result[child.name] = cast(child, value.get(child.name), f"{path}.{child.name}")
        except CastError as exc:
            failures.append(exc)
    if failures:
        raise InvalidValueError(path, flt.type_name, failures)
    return result


# ---------------------------------------------------------------------------
# Instance checks (never coerce)
# ---------------------------------------------------------------------------


def resolve_class(target: type | str) -> type:
    """Resolve the ``class_`` option to a class.

    Called when the filter is built, so an unresolvable path fails at
    definition time.

    Accepts ``"package.module.Class"`` or ``"package.module:Class"``.
    """
    if isinstance(target, type):
        return target
    module_name, sep, attr = target.partition(":")
    if not sep:
        module_name, _, attr = target.rpartition(".")
    try:
        resolved = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError, ValueError) as exc:
        msg = f"Cannot resolve class {target!r}"
        raise DefinitionError(msg) from exc
    if not isinstance(resolved, type):
        msg = f"{target!r} does not name a class"
        raise DefinitionError(msg)
    return resolved


def cast_model(flt: Filter, value: Any, path: str) -> Any:
    if isinstance(value, resolve_class(flt.options["class_"])):
        return value
    raise _invalid(flt, path)


def cast_file(flt: Filter, value: Any, path: str) -> Any:
    if isinstance(value, bytes | bytearray | io.IOBase):
        return value
    if callable(getattr(value, "read", None)):
        return value
    raise _invalid(flt, path)


def cast_interface(flt: Filter, value: Any, path: str) -> Any:
    methods = flt.options["methods"]
    if all(callable(getattr(value, method, None)) for method in methods):
        return value
    raise _invalid(flt, path)
