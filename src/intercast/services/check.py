"""Check and inspect interactions from outside Python code.

Targets are ``module:Class`` (or ``module.Class``) references to an
:class:`~intercast.interaction.Interaction` subclass.
"""

from __future__ import annotations

import importlib
import json
import logging
from pathlib import Path
from typing import Any

from pydantic_core import to_jsonable_python

from intercast.domain.errors import InputError
from intercast.domain.filters import Filter
from intercast.domain.registry import registered_types
from intercast.domain.validation import cast_inputs
from intercast.interaction import Interaction
from intercast.services.result import ErrorCode, ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class TargetError(LookupError):
    """A target reference does not name an Interaction subclass."""


def load_interaction(target: str) -> type[Interaction]:
    """Import and return the interaction class named by *target*."""
    module_name, sep, attr = target.partition(":")
    if not sep:
        module_name, _, attr = target.rpartition(".")
    if not module_name or not attr:
        msg = f"Expected 'module:Class', got {target!r}"
        raise TargetError(msg)
    try:
        obj = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as exc:
        msg = f"Cannot import {target!r}: {exc}"
        raise TargetError(msg) from exc
    if not (isinstance(obj, type) and issubclass(obj, Interaction)):
        msg = f"{target!r} is not an Interaction subclass"
        raise TargetError(msg)
    return obj


def _target_error(op: str, exc: TargetError) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=ErrorCode.BAD_TARGET, message=str(exc)),
    )


def _jsonable(value: Any) -> Any:
    return to_jsonable_python(value, fallback=repr)


def check_inputs(target: str, input_path: Path) -> ServiceResult:
    """Validate the JSON object in *input_path* against *target*'s filters."""
    op = "check"
    try:
        interaction = load_interaction(target)
    except TargetError as exc:
        return _target_error(op, exc)

    try:
        data = json.loads(input_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code=ErrorCode.BAD_INPUT,
                message=f"Cannot read inputs from {input_path}: {exc}",
            ),
        )

    try:
        values, report = cast_inputs(interaction.filters, data)
    except InputError as exc:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=ErrorCode.BAD_INPUT, message=str(exc)),
        )

    logger.debug("Checked %s: %d errors", target, report.count)
    if not report.valid:
        return ServiceResult(
            ok=False,
            op=op,
            data={"target": target, "valid": False},
            error=ServiceError(
                code=ErrorCode.INVALID_INPUTS,
                message=f"{report.count} invalid input(s)",
                detail={"errors": [e.model_dump(mode="json") for e in report.errors]},
            ),
        )

    ignored = sorted(set(data) - set(values))
    warnings = [f"Ignored undeclared input: {name}" for name in ignored]
    return ServiceResult(
        ok=True,
        op=op,
        data={"target": target, "valid": True, "inputs": _jsonable(values)},
        warnings=warnings,
    )


def describe_filter(flt: Filter) -> dict[str, Any]:
    """JSON-ready description of one filter and its children."""
    return {
        "name": flt.name,
        "type": flt.type,
        "options": {key: _jsonable(value) for key, value in flt.options.items()},
        "children": [describe_filter(child) for child in flt.children or ()],
    }


def describe_filters(target: str) -> ServiceResult:
    """List the declared filters of *target* in declaration order."""
    op = "filters"
    try:
        interaction = load_interaction(target)
    except TargetError as exc:
        return _target_error(op, exc)
    return ServiceResult(
        ok=True,
        op=op,
        data={
            "target": target,
            "desc": interaction.desc,
            "filters": [describe_filter(flt) for flt in interaction.filters],
        },
    )


def list_types() -> ServiceResult:
    """List every registered filter type."""
    types = [
        {
            "tag": str(rule.tag),
            "name": rule.human_name,
            "options": sorted(rule.allowed_options),
            "composite": rule.composite,
        }
        for rule in registered_types()
    ]
    return ServiceResult(ok=True, op="types", data={"count": len(types), "types": types})
