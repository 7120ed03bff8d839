"""
Application Settings

Type-safe settings for the remote config client and showcase server.
Read from a YAML file, with every value overridable from the environment.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .exceptions import SettingsError
from .logging_setup import get_service_logger

logger = get_service_logger("settings")

ENV_PREFIX = "REMOTECONFIG_"

SEARCH_PATHS = [
    Path("/etc/remoteconfig/config.yaml"),
    Path("config.yaml"),
]


@dataclass
class BackendSettings:
    """Remote configuration backend connection"""
    url: str = "https://firebaseremoteconfig.googleapis.com"
    project_id: str = ""
    namespace: str = "firebase"
    api_key: str = ""
    app_id: str = ""
    app_instance_id: str = "remoteconfig-showcase"
    timeout_s: float = 10.0

    @property
    def fetch_url(self) -> str:
        base = self.url.rstrip("/")
        return f"{base}/v1/projects/{self.project_id}/namespaces/{self.namespace}:fetch"


@dataclass
class ServerSettings:
    """Showcase HTTP server"""
    host: str = "127.0.0.1"
    port: int = 8085


@dataclass
class AppSettings:
    """Top-level application settings"""
    backend: BackendSettings = field(default_factory=BackendSettings)
    server: ServerSettings = field(default_factory=ServerSettings)
    defaults_path: str | None = None
    refresh_interval_s: float = 0.0
    fetch_on_start: bool = True
    log_level: str = "INFO"
    log_format: str = "json"


def find_settings_path() -> Path | None:
    """Return the first settings file that exists, if any"""
    for path in SEARCH_PATHS:
        if path.exists():
            return path
    return None


def _read_yaml(path: Path) -> dict:
    """Load settings YAML, tolerating a missing or broken file"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Settings file not found: {path}")
        return {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing settings: {e}")
        return {}

    if not isinstance(data, dict):
        logger.error(f"Settings file {path} is not a mapping, ignoring it")
        return {}
    return data


def _env(name: str) -> str | None:
    return os.environ.get(f"{ENV_PREFIX}{name}")


def _as_float(value: Any, setting: str, minimum: float = 0.0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise SettingsError(f"{setting} must be a number, got {value!r}", setting)
    if number < minimum:
        raise SettingsError(f"{setting} must be >= {minimum}, got {number}", setting)
    return number


def _as_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise SettingsError(f"server.port must be an integer, got {value!r}", "server.port")
    if port < 1 or port > 65535:
        raise SettingsError(f"Invalid port number: {port}", "server.port")
    return port


def _as_bool(value: Any, setting: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    raise SettingsError(f"{setting} must be a boolean, got {value!r}", setting)


def load_settings(path: str | Path | None = None) -> AppSettings:
    """
    Load settings from YAML and the environment.

    Args:
        path: Settings file. When omitted the standard locations are
            searched; with no file at all, built-in defaults are used.

    Returns:
        Populated AppSettings

    Raises:
        SettingsError: if a value is present but invalid
    """
    settings_path = Path(path) if path else find_settings_path()
    data = _read_yaml(settings_path) if settings_path else {}

    backend_data = data.get("backend", {}) or {}
    server_data = data.get("server", {}) or {}
    logging_data = data.get("logging", {}) or {}
    defaults = BackendSettings()

    backend = BackendSettings(
        url=_env("BACKEND_URL") or backend_data.get("url") or defaults.url,
        project_id=_env("PROJECT_ID") or backend_data.get("project_id", ""),
        namespace=_env("NAMESPACE") or backend_data.get("namespace") or defaults.namespace,
        api_key=_env("API_KEY") or backend_data.get("api_key", ""),
        app_id=_env("APP_ID") or backend_data.get("app_id", ""),
        app_instance_id=(
            _env("APP_INSTANCE_ID")
            or backend_data.get("app_instance_id")
            or defaults.app_instance_id
        ),
        timeout_s=_as_float(
            _env("FETCH_TIMEOUT_S") or backend_data.get("timeout_s", defaults.timeout_s),
            "backend.timeout_s",
            minimum=0.1,
        ),
    )

    server = ServerSettings(
        host=_env("HOST") or server_data.get("host") or ServerSettings.host,
        port=_as_port(_env("PORT") or server_data.get("port", ServerSettings.port)),
    )

    refresh_interval = _env("REFRESH_INTERVAL_S") or data.get("refresh_interval_s", 0)
    fetch_on_start = _env("FETCH_ON_START")
    if fetch_on_start is None:
        fetch_on_start = data.get("fetch_on_start", True)

    log_format = (_env("LOG_FORMAT") or logging_data.get("format") or "json").lower()
    if log_format not in ("json", "text"):
        raise SettingsError(f"logging.format must be 'json' or 'text', got {log_format!r}", "logging.format")

    settings = AppSettings(
        backend=backend,
        server=server,
        defaults_path=_env("DEFAULTS_PATH") or data.get("defaults_path"),
        refresh_interval_s=_as_float(refresh_interval, "refresh_interval_s"),
        fetch_on_start=_as_bool(fetch_on_start, "fetch_on_start"),
        log_level=(_env("LOG_LEVEL") or logging_data.get("level") or "INFO").upper(),
        log_format=log_format,
    )

    if data:
        logger.info(f"Settings loaded from {settings_path}")
    if not settings.backend.project_id:
        logger.warning("No backend project_id configured, fetches will fail")

    return settings
