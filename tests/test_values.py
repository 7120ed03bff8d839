"""
Unit tests for value discriminants and coercion rules.
"""

import pytest

from remoteconfig.common.exceptions import CoercionMismatch
from remoteconfig.services.config.values import (
    ValueType,
    mappings_equal,
    parse_literal,
    to_boolean,
    to_float,
    to_integer,
    to_string,
    value_type_of,
    values_equal,
)


class TestValueTypeOf:
    def test_bool_is_not_integer(self) -> None:
        assert value_type_of(True) is ValueType.BOOLEAN
        assert value_type_of(1) is ValueType.INTEGER
        assert value_type_of(1.0) is ValueType.FLOAT
        assert value_type_of("1") is ValueType.STRING

    @pytest.mark.parametrize("value", [None, [1], {"a": 1}, 2 ** 63])
    def test_rejects_non_config_values(self, value) -> None:
        with pytest.raises(TypeError):
            value_type_of(value)

    def test_zero_values(self) -> None:
        assert ValueType.STRING.zero == ""
        assert ValueType.BOOLEAN.zero is False
        assert ValueType.INTEGER.zero == 0
        assert ValueType.FLOAT.zero == 0.0


class TestEquality:
    def test_discriminant_matters(self) -> None:
        assert not values_equal(1, True)
        assert not values_equal(1, 1.0)
        assert values_equal("a", "a")

    def test_mappings_equal(self) -> None:
        assert mappings_equal({"x": 1}, {"x": 1})
        assert not mappings_equal({"x": 1}, {"x": True})
        assert not mappings_equal({"x": 1}, {"x": 1, "y": 2})


class TestCoercion:
    def test_to_string(self) -> None:
        assert to_string("k", "abc") == "abc"
        assert to_string("k", True) == "true"
        assert to_string("k", 42) == "42"
        assert to_string("k", 2.5) == "2.5"

    @pytest.mark.parametrize("raw", ["true", " YES ", "1", "on", "t"])
    def test_to_boolean_true_strings(self, raw) -> None:
        assert to_boolean("k", raw) is True

    @pytest.mark.parametrize("raw", ["false", "No", "0", "off", ""])
    def test_to_boolean_false_strings(self, raw) -> None:
        assert to_boolean("k", raw) is False

    def test_to_boolean_integers(self) -> None:
        assert to_boolean("k", 1) is True
        assert to_boolean("k", 0) is False
        with pytest.raises(CoercionMismatch):
            to_boolean("k", 2)
        with pytest.raises(CoercionMismatch):
            to_boolean("k", "maybe")

    def test_to_integer(self) -> None:
        assert to_integer("k", 7) == 7
        assert to_integer("k", 3.0) == 3
        assert to_integer("k", " 25 ") == 25
        for bad in (True, 3.5, "2.5", "ten", str(2 ** 63)):
            with pytest.raises(CoercionMismatch):
                to_integer("k", bad)

    def test_to_float(self) -> None:
        assert to_float("k", 1.5) == 1.5
        assert to_float("k", 2) == 2.0
        assert to_float("k", "0.25") == 0.25
        for bad in (False, "abc", "nan", "inf"):
            with pytest.raises(CoercionMismatch):
                to_float("k", bad)


class TestParseLiteral:
    def test_native_values(self) -> None:
        assert parse_literal(ValueType.STRING, "x") == "x"
        assert parse_literal(ValueType.BOOLEAN, False) is False
        assert parse_literal(ValueType.INTEGER, 12) == 12
        assert parse_literal(ValueType.FLOAT, 3) == 3.0

    def test_quoted_literals(self) -> None:
        assert parse_literal(ValueType.BOOLEAN, "true") is True
        assert parse_literal(ValueType.INTEGER, "12") == 12
        assert parse_literal(ValueType.FLOAT, "0.5") == 0.5

    @pytest.mark.parametrize(
        "value_type,raw",
        [
            (ValueType.STRING, 5),
            (ValueType.BOOLEAN, "yes"),
            (ValueType.INTEGER, 1.5),
            (ValueType.INTEGER, True),
            (ValueType.INTEGER, 2 ** 64),
            (ValueType.FLOAT, "fast"),
            (ValueType.FLOAT, None),
        ],
    )
    def test_mismatches(self, value_type, raw) -> None:
        with pytest.raises(ValueError):
            parse_literal(value_type, raw)
