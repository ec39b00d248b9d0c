"""Pluggy hook specifications for intercast.

One setup-time hook lets plugins register custom filter types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from intercast.domain.registry import TypeRule

hookspec = pluggy.HookspecMarker("intercast")
hookimpl = pluggy.HookimplMarker("intercast")


class IntercastHookSpec:
    """Hook specifications for the intercast plugin system."""

    @hookspec
    def register_filter_types(self) -> list[TypeRule] | None:
        """Return type rules to add to the filter type registry."""
