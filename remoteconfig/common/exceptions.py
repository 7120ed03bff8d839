"""
Custom Exception Classes for Remote Config

Hierarchical exception structure shared by the store, the fetch
operation and the application wiring.
"""

from enum import Enum


class RemoteConfigError(Exception):
    """Base exception for all remote config errors"""

    def __init__(self, message: str, recoverable: bool = True):
        self.message = message
        self.recoverable = recoverable
        super().__init__(message)


class ConfigLoadError(RemoteConfigError):
    """Bundled defaults resource is missing or malformed"""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        prefix = f"Defaults [{source}]" if source else "Defaults"
        super().__init__(f"{prefix}: {message}", recoverable=False)


class SettingsError(RemoteConfigError):
    """Application settings contain an invalid value"""

    def __init__(self, message: str, setting: str | None = None):
        self.setting = setting
        super().__init__(f"Settings Error: {message}", recoverable=False)


class FetchErrorKind(str, Enum):
    """Why a fetch did not produce a value set"""
    NETWORK = "network"
    PARSE = "parse"
    THROTTLED = "throttled"


class FetchError(RemoteConfigError):
    """Remote fetch failed; the active values are left untouched"""

    def __init__(
        self,
        kind: FetchErrorKind,
        message: str,
        status_code: int | None = None,
    ):
        self.kind = kind
        self.status_code = status_code
        super().__init__(f"Fetch Error ({kind.value}): {message}", recoverable=True)


class CoercionMismatch(RemoteConfigError):
    """Stored value cannot be read as the requested type"""

    def __init__(self, key: str, requested: str, value: object):
        self.key = key
        self.requested = requested
        self.value = value
        super().__init__(
            f"Cannot read {key!r} as {requested} (stored {type(value).__name__}: {value!r})",
            recoverable=True,
        )
