"""Tests for the per-type casting rules."""

from __future__ import annotations

import io
from datetime import UTC, date, datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

import pytest

from intercast.domain.casting import cast, resolve_class
from intercast.domain.errors import DefinitionError, InvalidValueError, MissingValueError
from intercast.domain.filters import build_filter
from intercast.domain.zone import use_time_zone


class Color(Enum):
    RED = 1


class Widget:
    pass


def _cast(tag: str, value: Any, **options: Any) -> Any:
    return cast(build_filter("thing", tag, options), value)


def _invalid(tag: str, value: Any, **options: Any) -> InvalidValueError:
    with pytest.raises(InvalidValueError) as exc_info:
        _cast(tag, value, **options)
    return exc_info.value


class TestIdentity:
    @pytest.mark.parametrize(
        ("tag", "value", "options"),
        [
            ("boolean", True, {}),
            ("integer", 42, {}),
            ("float", 1.5, {}),
            ("decimal", Decimal("1.25"), {}),
            ("string", "  padded  ", {}),
            ("symbol", "name", {}),
            ("date", date(2024, 1, 2), {}),
            ("datetime", datetime(2024, 1, 2, 3, 4, 5), {}),
            ("time", datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC), {}),
            ("array", [1, "a", None], {}),
            ("hash", {}, {}),
            ("model", Widget(), {"class_": Widget}),
            ("file", b"bytes", {}),
        ],
    )
    def test_target_representation_passes_unchanged(
        self, tag: str, value: Any, options: dict[str, Any]
    ) -> None:
        assert _cast(tag, value, **options) == value

    def test_model_returns_same_object(self) -> None:
        widget = Widget()
        assert _cast("model", widget, class_=Widget) is widget


class TestAbsentValues:
    def test_missing_without_default(self) -> None:
        with pytest.raises(MissingValueError) as exc_info:
            _cast("float", None)
        assert exc_info.value.path == "thing"
        assert exc_info.value.type_name == "float"

    def test_default_used_for_none(self) -> None:
        assert _cast("float", None, default=0) == 0.0

    def test_explicit_path(self) -> None:
        with pytest.raises(MissingValueError) as exc_info:
            cast(build_filter("thing", "float"), None, "outer.thing")
        assert exc_info.value.path == "outer.thing"


class TestBoolean:
    @pytest.mark.parametrize(("raw", "expected"), [(1, True), (0, False), ("true", True),
                                                   ("false", False), ("1", True), ("0", False)])
    def test_literals(self, raw: Any, expected: bool) -> None:
        assert _cast("boolean", raw) is expected

    @pytest.mark.parametrize("raw", ["yes", "TRUE", 2, 1.0, "", []])
    def test_rejects_everything_else(self, raw: Any) -> None:
        _invalid("boolean", raw)


class TestInteger:
    def test_numeric_string(self) -> None:
        assert _cast("integer", "42") == 42

    def test_fractional_string_rejected(self) -> None:
        _invalid("integer", "4.2")

    def test_integral_decimal_string(self) -> None:
        assert _cast("integer", "4.0") == 4

    def test_integral_float(self) -> None:
        assert _cast("integer", 3.0) == 3

    def test_fractional_float_rejected(self) -> None:
        _invalid("integer", 1.5)

    def test_decimal(self) -> None:
        assert _cast("integer", Decimal("10")) == 10
        _invalid("integer", Decimal("10.5"))

    @pytest.mark.parametrize("raw", [True, "abc", "", float("nan"), [1]])
    def test_rejects(self, raw: Any) -> None:
        _invalid("integer", raw)


class TestFloat:
    def test_int_becomes_float(self) -> None:
        result = _cast("float", 1)
        assert result == 1.0
        assert isinstance(result, float)

    def test_numeric_string(self) -> None:
        assert _cast("float", "2.5") == 2.5

    def test_decimal(self) -> None:
        assert _cast("float", Decimal("0.5")) == 0.5

    @pytest.mark.parametrize("raw", ["a", "nan", "inf", "1e400", 10**400, float("inf"), True, [1.0]])
    def test_rejects(self, raw: Any) -> None:
        _invalid("float", raw)


class TestDecimal:
    def test_string(self) -> None:
        assert _cast("decimal", "1.10") == Decimal("1.10")

    def test_float_uses_shortest_repr(self) -> None:
        assert _cast("decimal", 0.1) == Decimal("0.1")

    def test_int(self) -> None:
        assert _cast("decimal", 3) == Decimal(3)

    def test_digits_sets_precision(self) -> None:
        assert _cast("decimal", "3.14159", digits=3) == Decimal("3.14")

    @pytest.mark.parametrize("raw", ["abc", "NaN", False, Decimal("Infinity")])
    def test_rejects(self, raw: Any) -> None:
        _invalid("decimal", raw)


class TestString:
    def test_no_coercion_from_numbers(self) -> None:
        _invalid("string", 42)

    def test_strip(self) -> None:
        assert _cast("string", "  hi  ", strip=True) == "hi"

    def test_not_stripped_by_default(self) -> None:
        assert _cast("string", " hi ") == " hi "


class TestSymbol:
    def test_string(self) -> None:
        assert _cast("symbol", "abc") == "abc"

    def test_enum_member_uses_name(self) -> None:
        assert _cast("symbol", Color.RED) == "RED"

    def test_rejects_other_objects(self) -> None:
        _invalid("symbol", 1)


class TestDate:
    def test_free_form_string(self) -> None:
        assert _cast("date", "2024-03-05") == date(2024, 3, 5)

    def test_format(self) -> None:
        assert _cast("date", "05/03/2024", format="%d/%m/%Y") == date(2024, 3, 5)

    def test_format_mismatch(self) -> None:
        _invalid("date", "2024-03-05", format="%d/%m/%Y")

    def test_epoch_number(self) -> None:
        assert _cast("date", 0) == date(1970, 1, 1)

    def test_datetime_rejected(self) -> None:
        _invalid("date", datetime(2024, 1, 1))

    def test_garbage(self) -> None:
        _invalid("date", "not a date")


class TestDateTime:
    def test_invalid_month_with_format_is_invalid(self) -> None:
        error = _invalid("datetime", "2024-13-01", format="%Y-%m-%d")
        assert error.type_name == "date and time"

    def test_format(self) -> None:
        assert _cast("datetime", "2024-01-02", format="%Y-%m-%d") == datetime(2024, 1, 2)

    def test_free_form(self) -> None:
        assert _cast("datetime", "2024-01-02T03:04:05") == datetime(2024, 1, 2, 3, 4, 5)

    def test_numbers_rejected(self) -> None:
        _invalid("datetime", 0)


class TestTime:
    def test_epoch_number_in_utc(self) -> None:
        assert _cast("time", 0) == datetime(1970, 1, 1, tzinfo=UTC)

    def test_epoch_number_in_active_zone(self) -> None:
        with use_time_zone("Asia/Tokyo"):
            result = _cast("time", 0)
        assert result.utcoffset() == timedelta(hours=9)
        assert result == datetime(1970, 1, 1, tzinfo=UTC)

    def test_naive_string_gets_active_zone(self) -> None:
        with use_time_zone("Europe/Berlin"):
            result = _cast("time", "2024-07-01 12:00")
        assert result.utcoffset() == timedelta(hours=2)
        assert result.hour == 12

    def test_aware_string_converted_to_zone(self) -> None:
        with use_time_zone("UTC"):
            result = _cast("time", "2024-07-01T12:00:00+02:00")
        assert result.hour == 10
        assert result.utcoffset() == timedelta(0)

    def test_naive_datetime_gets_zone(self) -> None:
        result = _cast("time", datetime(2024, 1, 1, 8))
        assert result.tzinfo is UTC

    def test_aware_datetime_untouched(self) -> None:
        value = datetime(2024, 1, 1, 8, tzinfo=timezone(timedelta(hours=-5)))
        assert _cast("time", value) is value

    def test_format(self) -> None:
        result = _cast("time", "2024-01-02 03:04", format="%Y-%m-%d %H:%M")
        assert result == datetime(2024, 1, 2, 3, 4, tzinfo=UTC)

    def test_garbage(self) -> None:
        _invalid("time", "soon")


class TestArray:
    def test_element_failures_have_positional_paths(self) -> None:
        flt = build_filter("tags", "array", children=[build_filter("item", "integer")])
        with pytest.raises(InvalidValueError) as exc_info:
            cast(flt, [1, "2", "x"])
        error = exc_info.value
        assert error.path == "tags"
        assert [leaf.path for leaf in error.leaves()] == ["tags[2]"]
        assert error.leaves()[0].type_name == "integer"

    def test_elements_cast(self) -> None:
        flt = build_filter("tags", "array", children=[build_filter("item", "integer")])
        assert cast(flt, [1, "2", 3.0]) == [1, 2, 3]

    def test_collects_every_element_failure(self) -> None:
        flt = build_filter("tags", "array", children=[build_filter("item", "integer")])
        with pytest.raises(InvalidValueError) as exc_info:
            cast(flt, ["a", 1, "b"])
        assert [leaf.path for leaf in exc_info.value.leaves()] == ["tags[0]", "tags[2]"]

    def test_none_element_is_invalid(self) -> None:
        flt = build_filter("tags", "array", children=[build_filter("item", "integer")])
        with pytest.raises(InvalidValueError) as exc_info:
            cast(flt, [None])
        leaf = exc_info.value.leaves()[0]
        assert isinstance(leaf, InvalidValueError)
        assert leaf.path == "tags[0]"

    def test_tuple_becomes_list(self) -> None:
        assert _cast("array", (1, 2)) == [1, 2]

    @pytest.mark.parametrize("raw", ["abc", {"a": 1}, 5])
    def test_rejects_non_sequences(self, raw: Any) -> None:
        _invalid("array", raw)

    def test_nested_arrays(self) -> None:
        inner = build_filter("item", "array", children=[build_filter("item", "integer")])
        flt = build_filter("grid", "array", children=[inner])
        with pytest.raises(InvalidValueError) as exc_info:
            cast(flt, [[1], [2, "x"]])
        assert [leaf.path for leaf in exc_info.value.leaves()] == ["grid[1][1]"]


class TestHash:
    def _address(self, **options: Any) -> Any:
        children = [
            build_filter("zip", "string"),
            build_filter("city", "string", {"default": "Springfield"}),
        ]
        return build_filter("address", "hash", options, children)

    def test_casts_declared_keys(self) -> None:
        result = cast(self._address(), {"zip": "12345", "extra": 1})
        assert result == {"zip": "12345", "city": "Springfield"}

    def test_keep_unknown_keys_without_strip(self) -> None:
        result = cast(self._address(strip=False), {"zip": "1", "extra": 1})
        assert result == {"zip": "1", "extra": 1, "city": "Springfield"}

    def test_nested_failures_are_keyed(self) -> None:
        with pytest.raises(InvalidValueError) as exc_info:
            cast(self._address(), {"city": 5})
        leaves = exc_info.value.leaves()
        assert [(leaf.path, leaf.kind) for leaf in leaves] == [
            ("address.zip", "missing"),
            ("address.city", "invalid"),
        ]

    def test_rejects_non_string_keys(self) -> None:
        _invalid("hash", {1: "a"})

    def test_rejects_non_mapping(self) -> None:
        _invalid("hash", [("a", 1)])

    def test_hash_of_arrays(self) -> None:
        flt = build_filter(
            "data",
            "hash",
            children=[build_filter("ids", "array", children=[build_filter("item", "integer")])],
        )
        with pytest.raises(InvalidValueError) as exc_info:
            cast(flt, {"ids": [1, "no"]})
        assert [leaf.path for leaf in exc_info.value.leaves()] == ["data.ids[1]"]


class TestModel:
    def test_wrong_class(self) -> None:
        _invalid("model", "widget", class_=Widget)

    def test_never_coerces(self) -> None:
        _invalid("model", {"a": 1}, class_=Widget)

    def test_dotted_class_path(self) -> None:
        assert _cast("model", Decimal(1), class_="decimal.Decimal") == Decimal(1)

    def test_colon_class_path(self) -> None:
        assert _cast("model", Decimal(1), class_="decimal:Decimal") == Decimal(1)

    def test_resolve_class_rejects_non_class(self) -> None:
        with pytest.raises(DefinitionError, match="does not name a class"):
            resolve_class("decimal.getcontext")


class TestFile:
    def test_file_like(self) -> None:
        stream = io.BytesIO(b"data")
        assert _cast("file", stream) is stream

    def test_readable_object(self) -> None:
        class Upload:
            def read(self) -> bytes:
                return b""

        upload = Upload()
        assert _cast("file", upload) is upload

    def test_rejects_strings(self) -> None:
        _invalid("file", "path/to/file")


class TestInterface:
    def test_accepts_duck_type(self) -> None:
        stream = io.StringIO()
        assert _cast("interface", stream, methods=["write", "getvalue"]) is stream

    def test_rejects_missing_method(self) -> None:
        _invalid("interface", object(), methods=["write"])

    def test_non_callable_attribute_does_not_count(self) -> None:
        class Thing:
            write = "not callable"

        _invalid("interface", Thing(), methods=["write"])
