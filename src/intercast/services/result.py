"""What the check services hand back to the CLI.

Each service returns a :class:`ServiceResult` tagged with its ``op``. The
``data`` payload depends on the op:

``check``
    ``target``, ``valid`` and, on success, the cast ``inputs``.
``filters``
    ``target``, ``desc`` and ``filters`` (name, type, options, children).
``types``
    ``count`` and ``types`` (tag, name, options, composite).

A bad target, an unreadable input file, or inputs that fail validation are
reported through :class:`ServiceError`, never raised.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Why a service call failed."""

    BAD_TARGET = "BAD_TARGET"
    """The ``module:Class`` target is unimportable or not an Interaction."""

    BAD_INPUT = "BAD_INPUT"
    """The input file is unreadable, not JSON, or not a JSON object."""

    INVALID_INPUTS = "INVALID_INPUTS"
    """Inputs were read but failed casting; ``detail["errors"]`` lists them."""


class ServiceError(BaseModel):
    """Failure payload of a :class:`ServiceResult`.

    For ``INVALID_INPUTS``, ``detail["errors"]`` holds one dumped
    ``FieldError`` per failing attribute, in declaration order.
    """

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one ``check``, ``filters`` or ``types`` call.

    ``warnings`` carries non-fatal notes, such as inputs that no filter
    declares. ``error`` is set exactly when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
