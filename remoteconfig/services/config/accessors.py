"""
Typed Accessors

Total read functions over the Config Store. A missing key, or a value
that cannot be read as the requested type, yields the type's zero
value: "" / False / 0 / 0.0.
"""

from remoteconfig.common.exceptions import CoercionMismatch
from remoteconfig.common.logging_setup import get_service_logger

from .store import ConfigStore
from .values import COERCERS, ConfigValue, ValueType, value_type_of

logger = get_service_logger("config.accessors")


class RemoteConfig:
    """
    Read-only facade handed to presentation code.

    Coercion policy, identical for every key:
    - string:  str as-is; bool -> "true"/"false"; numbers -> their text
    - boolean: bool as-is; "1/true/t/yes/y/on" and "0/false/f/no/n/off/"
      (case-insensitive); integers 1 and 0
    - integer: int as-is; integral floats; base-10 numeric strings
    - float:   float as-is; ints; numeric strings
    Booleans are never read as numbers.
    """

    def __init__(self, store: ConfigStore):
        self._store = store

    @property
    def store(self) -> ConfigStore:
        return self._store

    def get_string(self, key: str) -> str:
        return self._read(key, ValueType.STRING)

    def get_boolean(self, key: str) -> bool:
        return self._read(key, ValueType.BOOLEAN)

    def get_integer(self, key: str) -> int:
        return self._read(key, ValueType.INTEGER)

    def get_float(self, key: str) -> float:
        return self._read(key, ValueType.FLOAT)

    def get_value(self, key: str) -> ConfigValue | None:
        """Raw stored value, without coercion"""
        return self._store.get(key)

    def describe(self) -> dict[str, dict]:
        """All current values with their discriminants"""
        snapshot = self._store.snapshot()
        return {
            key: {"value": value, "type": value_type_of(value).value}
            for key, value in snapshot.items()
        }

    def _read(self, key: str, value_type: ValueType):
        value = self._store.get(key)
        if value is None:
            return value_type.zero

        try:
            return COERCERS[value_type](key, value)
        except CoercionMismatch as e:
            logger.debug(str(e), extra={"key": key, "requested": value_type.value})
            return value_type.zero
