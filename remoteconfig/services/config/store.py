"""
Config Store

Holds the active value of every known key. Each generation is an
immutable snapshot; replacing it swaps a single reference under a lock,
so readers see either the old generation or the new one, never a mix.
"""

import threading
from collections.abc import Callable, Mapping
from types import MappingProxyType

from remoteconfig.common.logging_setup import get_service_logger

from .values import ConfigValue, mappings_equal, value_type_of

logger = get_service_logger("config.store")

ChangeListener = Callable[[Mapping[str, ConfigValue], int], None]


class ConfigStore:
    """
    Single source of truth for config values.

    Seeded from the Default Table; every later replacement merges the
    new values over the previous generation, so keys a fetch does not
    mention keep their previous value.
    """

    def __init__(self, defaults: Mapping[str, ConfigValue]):
        self._lock = threading.Lock()
        self._snapshot: Mapping[str, ConfigValue] = MappingProxyType(dict(defaults))
        self._generation = 0
        self._listeners: list[ChangeListener] = []

    @classmethod
    def initialize(cls, defaults: Mapping[str, ConfigValue]) -> "ConfigStore":
        """Create a store seeded with the Default Table"""
        store = cls(defaults)
        logger.debug(f"Config store initialized with {len(defaults)} keys")
        return store

    @property
    def generation(self) -> int:
        """Number of replacements applied since initialization"""
        return self._generation

    def get(self, key: str) -> ConfigValue | None:
        """Current value of a key, or None if it was never seeded"""
        return self._snapshot.get(key)

    def snapshot(self) -> Mapping[str, ConfigValue]:
        """Read-only view of one complete generation"""
        return self._snapshot

    def replace_all(self, values: Mapping[str, ConfigValue]) -> int:
        """
        Swap in a new generation: values merged over the current one.

        Returns:
            The new generation number
        """
        self._validate(values)
        with self._lock:
            merged = {**self._snapshot, **values}
            generation = self._swap(merged)
        self._notify(merged, generation)
        return generation

    def apply_if_changed(self, values: Mapping[str, ConfigValue]) -> bool:
        """
        Replace only when the merge would change something.

        Comparison and swap happen in one critical section so two
        concurrent callers are applied in the order they get the lock.

        Returns:
            True if a new generation was activated
        """
        self._validate(values)
        with self._lock:
            current = self._snapshot
            merged = {**current, **values}
            if mappings_equal(merged, dict(current)):
                return False
            generation = self._swap(merged)
        self._notify(merged, generation)
        return True

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """
        Register a callback run after every applied replacement.

        Listeners are called after the lock is released, with the new
        snapshot and its generation number. Within one thread they see
        generations in order. When several threads replace values at
        once, notifications can arrive out of order; a listener that
        needs the newest state should drop any generation lower than the
        last one it saw.

        Returns:
            A function that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _swap(self, merged: dict[str, ConfigValue]) -> int:
        # Caller holds self._lock
        self._snapshot = MappingProxyType(merged)
        self._generation += 1
        return self._generation

    def _notify(self, merged: dict[str, ConfigValue], generation: int) -> None:
        # Runs outside self._lock; ordering across threads is not guaranteed
        with self._lock:
            listeners = list(self._listeners)
        snapshot = MappingProxyType(merged)
        for listener in listeners:
            try:
                listener(snapshot, generation)
            except Exception as e:
                logger.error(f"Config change listener failed: {e}", exc_info=True)

    @staticmethod
    def _validate(values: Mapping[str, ConfigValue]) -> None:
        for key, value in values.items():
            if not isinstance(key, str):
                raise TypeError(f"Config keys must be strings, got {key!r}")
            value_type_of(value)
