"""
Common Utilities

Shared modules used across the package:
- settings.py - Application settings (YAML + environment)
- exceptions.py - Custom exception classes
- logging_setup.py - Structured logging setup
"""

from .exceptions import (
    RemoteConfigError,
    ConfigLoadError,
    SettingsError,
    FetchError,
    FetchErrorKind,
    CoercionMismatch,
)
from .logging_setup import (
    setup_logging,
    get_service_logger,
    configure_logging,
    LogContext,
    log_config_values,
)
from .settings import (
    AppSettings,
    BackendSettings,
    ServerSettings,
    load_settings,
)

__all__ = [
    # Settings
    "AppSettings",
    "BackendSettings",
    "ServerSettings",
    "load_settings",
    # Exceptions
    "RemoteConfigError",
    "ConfigLoadError",
    "SettingsError",
    "FetchError",
    "FetchErrorKind",
    "CoercionMismatch",
    # Logging
    "setup_logging",
    "get_service_logger",
    "configure_logging",
    "LogContext",
    "log_config_values",
]
