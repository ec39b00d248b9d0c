"""Interaction base class — declare typed inputs, cast them, run logic.

Usage::

    class AddInteraction(Interaction):
        x = Input("float")
        y = Input("float", default=0)

        def execute(self) -> float:
            return self.x + self.y

    outcome = AddInteraction.run({"x": "1.5"})
    if outcome.valid:
        print(outcome.result)
    else:
        print(outcome.errors.full_messages())

Filters are collected when the subclass is created: imported filters first
(``import_filters=`` class keyword), then class-body :class:`Input`
declarations in order. The resulting :class:`FilterSet` is frozen.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar, Self

from intercast.domain.errors import (
    DefinitionError,
    InputError,
    InvalidInteractionError,
    ReservedInputError,
)
from intercast.domain.filter_set import FilterSet
from intercast.domain.filters import Filter, build_filter
from intercast.domain.types import ErrorKind, is_reserved
from intercast.domain.validation import ErrorReport, cast_inputs, error_message

_NO_INPUTS: Mapping[str, Any] = MappingProxyType({})

ELEMENT_NAME = "item"

logger = logging.getLogger(__name__)


class Input:
    """Unbound filter declaration used in an interaction's class body.

    Keyword arguments whose values are :class:`Input` declare hash children;
    a single positional :class:`Input` declares an array's element filter.
    All other keyword arguments are filter options.

    Examples:
        >>> tags = Input("array", Input("integer"))
        >>> address = Input("hash", zip=Input("string"), city=Input("string"))
    """

    def __init__(self, type_tag: str, *elements: Input, **options: Any) -> None:
        self.type_tag = type_tag
        self.elements = elements
        self.fields = {k: v for k, v in options.items() if isinstance(v, Input)}
        self.options = {k: v for k, v in options.items() if not isinstance(v, Input)}

    def bind(self, name: str) -> Filter:
        """Build the :class:`Filter` for this declaration under *name*."""
        children = [element.bind(ELEMENT_NAME) for element in self.elements]
        children.extend(child.bind(key) for key, child in self.fields.items())
        return build_filter(name, self.type_tag, self.options, children)

    def __repr__(self) -> str:
        return f"Input({self.type_tag!r})"


class Errors:
    """Mutable error collection of one interaction instance.

    Keyed by attribute path. Holds human messages and, separately, the
    symbolic kinds added through :meth:`add_sym`.
    """

    BASE = "base"

    def __init__(self) -> None:
        self._messages: dict[str, list[str]] = {}
        self._symbolic: dict[str, list[str]] = {}

    def add(self, path: str, message: str) -> None:
        self._messages.setdefault(path, []).append(message)

    def add_sym(self, path: str, kind: str, message: str | None = None) -> None:
        """Record a symbolic error kind plus its message."""
        self._symbolic.setdefault(path, []).append(str(kind))
        if message is None:
            message = error_message(ErrorKind(kind), None) if kind in set(ErrorKind) else str(kind)
        self.add(path, message)

    def merge(self, report: ErrorReport) -> None:
        """Add every entry of a validation report."""
        for error in report.errors:
            self.add_sym(error.path, error.kind, error.message)

    def merge_into_base(self, other: Errors) -> None:
        for message in other.full_messages():
            self.add(self.BASE, message)

    @property
    def messages(self) -> dict[str, list[str]]:
        return {path: list(msgs) for path, msgs in self._messages.items()}

    @property
    def symbolic(self) -> dict[str, list[str]]:
        return {path: list(kinds) for path, kinds in self._symbolic.items()}

    def full_messages(self) -> list[str]:
        full: list[str] = []
        for path, msgs in self._messages.items():
            for message in msgs:
                full.append(message if path == self.BASE else f"{path} {message}")
        return full

    def __getitem__(self, path: str) -> list[str]:
        return list(self._messages.get(path, []))

    def __len__(self) -> int:
        return sum(len(msgs) for msgs in self._messages.values())

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __repr__(self) -> str:
        return f"Errors({self._messages!r})"


class _Interrupt(Exception):
    """Stops ``execute`` after a failed composition."""


def _as_sources(import_filters: Any) -> list[type[Interaction]]:
    if import_filters is None:
        return []
    if isinstance(import_filters, type):
        return [import_filters]
    return list(import_filters)


class Interaction:
    """Base class for typed interactions.

    Subclasses declare :class:`Input` attributes and override
    :meth:`execute`. Each declared filter becomes an instance attribute
    holding the cast value, or the raw value when casting failed.
    """

    filters: ClassVar[FilterSet] = FilterSet()
    desc: ClassVar[str | None] = None

    def __init_subclass__(
        cls,
        *,
        import_filters: type[Interaction] | Iterable[type[Interaction]] | None = None,
        only: str | Iterable[str] | None = None,
        except_: str | Iterable[str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        if import_filters is None and (only is not None or except_ is not None):
            msg = "only/except_ require import_filters"
            raise DefinitionError(msg)

        filters = cls.filters.inherit()
        inherited = set(filters.names())

        def declare(flt: Filter) -> None:
            if flt.name in inherited and flt.name in filters:
                filters.replace(flt)
                inherited.discard(flt.name)
            else:
                filters.add(flt)

        for source in _as_sources(import_filters):
            for flt in source.filters.select(only=only, except_=except_):
                declare(flt)

        protected = _protected_names()
        for name, value in list(cls.__dict__.items()):
            if not isinstance(value, Input):
                continue
            if name in protected:
                msg = f"Attribute name {name!r} shadows an Interaction member"
                raise DefinitionError(msg)
            declare(value.bind(name))
            delattr(cls, name)

        filters.freeze()
        cls.filters = filters

    def __init__(self, inputs: Mapping[str, Any] = _NO_INPUTS) -> None:
        if not isinstance(inputs, Mapping):
            msg = f"inputs must be a mapping, not {type(inputs).__name__}"
            raise InputError(msg)
        for key in inputs:
            if is_reserved(str(key)):
                raise ReservedInputError(repr(key))

        values, report = cast_inputs(type(self).filters, inputs)
        for name, value in values.items():
            setattr(self, name, value)

        self._interaction_report = report
        self._interaction_errors = Errors()
        self._interaction_errors.merge(report)
        self._interaction_result: Any = None

    # --- outcome ---

    @property
    def inputs(self) -> dict[str, Any]:
        """Cast values of declared filters; undeclared inputs are dropped."""
        return {flt.name: getattr(self, flt.name) for flt in type(self).filters}

    @property
    def errors(self) -> Errors:
        return self._interaction_errors

    @property
    def report(self) -> ErrorReport:
        """The validation report produced when the inputs were cast."""
        return self._interaction_report

    @property
    def valid(self) -> bool:
        return not self._interaction_errors

    @property
    def result(self) -> Any:
        return self._interaction_result

    def given(self, name: str) -> bool:
        """Whether the declared input *name* holds a value."""
        if name not in type(self).filters:
            msg = f"{type(self).__name__} has no input {name!r}"
            raise ValueError(msg)
        return getattr(self, name) is not None

    # --- running ---

    def execute(self) -> Any:
        """Business logic; runs only when every input is valid."""
        raise NotImplementedError

    def compose(self, other: type[Interaction], inputs: Mapping[str, Any] = _NO_INPUTS) -> Any:
        """Run *other* and return its result.

        When *other* is invalid its errors are added to ``base`` and this
        interaction stops executing.
        """
        outcome = other.run(inputs)
        if outcome.valid:
            return outcome.result
        self._interaction_errors.merge_into_base(outcome.errors)
        raise _Interrupt

    @classmethod
    def run(cls, inputs: Mapping[str, Any] = _NO_INPUTS) -> Self:
        """Cast *inputs*, then execute when valid. Returns the instance."""
        interaction = cls(inputs)
        interaction._run()
        return interaction

    @classmethod
    def run_strict(cls, inputs: Mapping[str, Any] = _NO_INPUTS) -> Any:
        """Like :meth:`run` but return the result or raise.

        Raises:
            InvalidInteractionError: The outcome has errors.
        """
        outcome = cls.run(inputs)
        if not outcome.valid:
            msg = "; ".join(outcome.errors.full_messages())
            raise InvalidInteractionError(msg, outcome.errors)
        return outcome.result

    def _run(self) -> None:
        name = type(self).__name__
        if not self.valid:
            logger.debug("%s invalid: %s", name, self._interaction_errors.full_messages())
            return
        try:
            result = self.execute()
        except _Interrupt:
            result = None
        if self._interaction_errors:
            logger.debug("%s failed: %s", name, self._interaction_errors.full_messages())
            return
        self._interaction_result = result
        logger.debug("%s succeeded", name)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} inputs={self.inputs!r}>"


Interaction.filters.freeze()


def _protected_names() -> frozenset[str]:
    members = {name for name in dir(Interaction) if not name.startswith("__")}
    return frozenset(members | {"errors", "result", "report"})
