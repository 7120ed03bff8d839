"""
Config Service - Remote Configuration

Responsibilities:
- Load bundled defaults once at startup
- Hold the active values in an atomically swapped store
- Fetch and activate values from the backend
- Expose typed accessors with a zero-value fallback
"""

from .accessors import RemoteConfig
from .defaults import DefaultTable, build_default_table, load_defaults
from .service import FetchInfo, FetchResult, FetchStatus, RemoteConfigService
from .store import ConfigStore
from .sync import RemoteConfigSync
from .values import ConfigValue, ValueType

__all__ = [
    "ConfigStore",
    "ConfigValue",
    "DefaultTable",
    "FetchInfo",
    "FetchResult",
    "FetchStatus",
    "RemoteConfig",
    "RemoteConfigService",
    "RemoteConfigSync",
    "ValueType",
    "build_default_table",
    "load_defaults",
]
