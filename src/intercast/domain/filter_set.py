"""FilterSet — ordered, name-unique collection of filters.

INVARIANT: copies never alias the source's storage. Inheriting or
importing filters produces a new set; changing it never changes the source.

Sets follow a build-then-freeze discipline: declare everything, call
:meth:`FilterSet.freeze`, then cast against the set from any number of
threads.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from intercast.domain.errors import AmbiguousImportError, DefinitionError

if TYPE_CHECKING:
    from intercast.domain.filters import Filter


def _name_list(names: str | Iterable[str]) -> list[str]:
    if isinstance(names, str):
        return [names]
    return [str(name) for name in names]


class FilterSet:
    """Insertion-ordered mapping of attribute name to :class:`Filter`."""

    def __init__(self, filters: Iterable[Filter] = ()) -> None:
        self._filters: dict[str, Filter] = {}
        self._frozen = False
        for flt in filters:
            self.add(flt)

    # --- mutation (definition time only) ---

    def add(self, flt: Filter) -> None:
        """Append *flt*; duplicate names are a definition error."""
        self._check_mutable()
        if flt.name in self._filters:
            msg = f"Filter {flt.name!r} is already defined"
            raise DefinitionError(msg)
        self._filters[flt.name] = flt

    def replace(self, flt: Filter) -> None:
        """Override an existing filter in place, keeping its position."""
        self._check_mutable()
        if flt.name not in self._filters:
            msg = f"Filter {flt.name!r} is not defined"
            raise DefinitionError(msg)
        self._filters[flt.name] = flt

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            msg = "Cannot modify a frozen filter set"
            raise DefinitionError(msg)

    # --- composition ---

    def copy(self) -> FilterSet:
        """Return an unfrozen set holding copies of every filter."""
        return FilterSet(dataclasses.replace(flt) for flt in self._filters.values())

    inherit = copy

    def select(
        self,
        *,
        only: str | Iterable[str] | None = None,
        except_: str | Iterable[str] | None = None,
    ) -> FilterSet:
        """Return copies of a subset of filters, by inclusion or exclusion.

        Raises:
            AmbiguousImportError: Both *only* and *except_* were given.
            DefinitionError: A listed name is not in this set.
        """
        if only is not None and except_ is not None:
            msg = "Cannot import filters with both only and except_"
            raise AmbiguousImportError(msg)

        listed = _name_list(only if only is not None else except_ or [])
        unknown = [name for name in listed if name not in self._filters]
        if unknown:
            msg = f"Cannot import unknown filters: {unknown}"
            raise DefinitionError(msg)

        if only is not None:
            keep = set(listed)
            chosen = [f for name, f in self._filters.items() if name in keep]
        else:
            drop = set(listed)
            chosen = [f for name, f in self._filters.items() if name not in drop]
        return FilterSet(dataclasses.replace(flt) for flt in chosen)

    # --- read access ---

    def names(self) -> list[str]:
        return list(self._filters)

    def get(self, name: str) -> Filter | None:
        return self._filters.get(name)

    def __getitem__(self, name: str) -> Filter:
        return self._filters[name]

    def __contains__(self, name: object) -> bool:
        return name in self._filters

    def __iter__(self) -> Iterator[Filter]:
        return iter(self._filters.values())

    def __len__(self) -> int:
        return len(self._filters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return self._filters == other._filters

    def __repr__(self) -> str:
        return f"FilterSet({self.names()!r})"
