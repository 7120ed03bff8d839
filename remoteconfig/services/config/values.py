"""
Config Values

The four value types a config key can hold, plus the coercion rules
used when a value is read as a different type than it was stored.
"""

import math
from enum import Enum
from typing import Union

from remoteconfig.common.exceptions import CoercionMismatch

ConfigValue = Union[str, bool, int, float]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

TRUE_STRINGS = frozenset(("1", "true", "t", "yes", "y", "on"))
FALSE_STRINGS = frozenset(("0", "false", "f", "no", "n", "off", ""))


class ValueType(str, Enum):
    """Discriminant of a config value"""
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"

    @property
    def zero(self) -> ConfigValue:
        return ZERO_VALUES[self]


ZERO_VALUES: dict[ValueType, ConfigValue] = {
    ValueType.STRING: "",
    ValueType.BOOLEAN: False,
    ValueType.INTEGER: 0,
    ValueType.FLOAT: 0.0,
}


def value_type_of(value: object) -> ValueType:
    """
    Return the discriminant of a value.

    bool is checked before int since bool is an int subclass.

    Raises:
        TypeError: for anything that is not a config value
    """
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            raise TypeError(f"Integer out of 64-bit range: {value}")
        return ValueType.INTEGER
    if isinstance(value, float):
        return ValueType.FLOAT
    if isinstance(value, str):
        return ValueType.STRING
    raise TypeError(f"Unsupported config value type: {type(value).__name__}")


def values_equal(a: ConfigValue, b: ConfigValue) -> bool:
    """Equality that also compares discriminants (1 != True != 1.0)"""
    return type(a) is type(b) and a == b


def mappings_equal(a: dict, b: dict) -> bool:
    """Discriminant-aware equality of two key/value mappings"""
    if a.keys() != b.keys():
        return False
    return all(values_equal(a[key], b[key]) for key in a)


def to_string(key: str, value: ConfigValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return value if isinstance(value, str) else repr(value)
    raise CoercionMismatch(key, ValueType.STRING.value, value)


def to_boolean(key: str, value: ConfigValue) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    elif isinstance(value, int) and value in (0, 1):
        return value == 1
    raise CoercionMismatch(key, ValueType.BOOLEAN.value, value)


def to_integer(key: str, value: ConfigValue) -> int:
    result = None
    if isinstance(value, bool):
        result = None
    elif isinstance(value, int):
        result = value
    elif isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            result = int(value)
    elif isinstance(value, str):
        try:
            result = int(value.strip(), 10)
        except ValueError:
            result = None

    if result is None or not INT64_MIN <= result <= INT64_MAX:
        raise CoercionMismatch(key, ValueType.INTEGER.value, value)
    return result


def to_float(key: str, value: ConfigValue) -> float:
    result = None
    if isinstance(value, bool):
        result = None
    elif isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(value.strip())
        except ValueError:
            result = None

    if result is None or not math.isfinite(result):
        raise CoercionMismatch(key, ValueType.FLOAT.value, value)
    return result


COERCERS = {
    ValueType.STRING: to_string,
    ValueType.BOOLEAN: to_boolean,
    ValueType.INTEGER: to_integer,
    ValueType.FLOAT: to_float,
}


def parse_literal(value_type: ValueType, raw: object) -> ConfigValue:
    """
    Parse a literal from a declarative source into its declared type.

    Native values of the declared type are accepted as-is; strings are
    parsed (so a YAML author may quote numbers). Anything else fails.

    Raises:
        ValueError: if the literal does not match the declared type
    """
    if raw is None:
        raise ValueError("value is missing")

    if value_type == ValueType.STRING:
        if not isinstance(raw, str):
            raise ValueError(f"expected a string, got {type(raw).__name__}")
        return raw

    if value_type == ValueType.BOOLEAN:
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str) and raw.strip().lower() in ("true", "false"):
            return raw.strip().lower() == "true"
        raise ValueError(f"expected a boolean, got {raw!r}")

    if value_type == ValueType.INTEGER:
        if isinstance(raw, bool) or isinstance(raw, float):
            raise ValueError(f"expected an integer, got {raw!r}")
        number = raw if isinstance(raw, int) else int(str(raw).strip(), 10)
        if not INT64_MIN <= number <= INT64_MAX:
            raise ValueError(f"integer out of 64-bit range: {number}")
        return number

    if isinstance(raw, bool):
        raise ValueError(f"expected a float, got {raw!r}")
    number = float(raw) if isinstance(raw, (int, float)) else float(str(raw).strip())
    if not math.isfinite(number):
        raise ValueError(f"float must be finite, got {raw!r}")
    return number
