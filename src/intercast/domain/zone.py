"""Active time zone for ``time`` filters.

``time`` values are always zone-aware. The zone comes from the innermost
:func:`use_time_zone` block, falling back to the process default set by
:func:`set_default_time_zone` (UTC unless configured).
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_default_zone: tzinfo = UTC
_active_zone: ContextVar[tzinfo | None] = ContextVar("intercast_time_zone", default=None)


def resolve_time_zone(zone: str | tzinfo) -> tzinfo:
    """Turn a zone name (``"UTC"``, ``"Europe/Berlin"``) into a tzinfo."""
    if isinstance(zone, tzinfo):
        return zone
    if zone.upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        msg = f"Unknown time zone: {zone!r}"
        raise ValueError(msg) from exc


def set_default_time_zone(zone: str | tzinfo) -> tzinfo:
    """Set the process-wide fallback zone and return it."""
    global _default_zone
    _default_zone = resolve_time_zone(zone)
    return _default_zone


def current_time_zone() -> tzinfo:
    """Return the zone ``time`` filters cast into right now."""
    active = _active_zone.get()
    return active if active is not None else _default_zone


@contextmanager
def use_time_zone(zone: str | tzinfo) -> Iterator[tzinfo]:
    """Cast ``time`` values in *zone* for the duration of the block."""
    token = _active_zone.set(resolve_time_zone(zone))
    try:
        yield current_time_zone()
    finally:
        _active_zone.reset(token)
