"""
Structured Logging Setup

Consistent logging configuration across the client, the showcase
server and the CLI. Uses JSON format for structured logs by default.
"""

import json
import logging
import os
import sys
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any

# LogRecord attributes that are never copied into the JSON payload
_RESERVED_ATTRS = frozenset((
    "name", "msg", "args", "levelname", "levelno", "pathname",
    "filename", "module", "exc_info", "exc_text", "stack_info",
    "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "service",
    "message", "taskName",
))


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service", "unknown"),
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ServiceLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds service name to all logs"""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        kwargs.setdefault("extra", {})
        kwargs["extra"]["service"] = self.extra.get("service", "unknown")
        return msg, kwargs


def setup_logging(
    service_name: str,
    log_level: str = "INFO",
    json_format: bool = True,
) -> logging.Logger:
    """
    Set up structured logging for a component.

    Args:
        service_name: Name of the component (e.g., "config.sync", "server")
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON format (True for production, False for dev)

    Returns:
        Configured logger instance
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(f"remoteconfig.{service_name}")
    logger.setLevel(numeric_level)

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)

    if json_format:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Don't propagate to root logger
    logger.propagate = False

    return logger


def get_service_logger(service_name: str) -> ServiceLoggerAdapter:
    """
    Get a logger adapter with service context.

    Level and format come from REMOTECONFIG_LOG_LEVEL and
    REMOTECONFIG_LOG_FORMAT so every module logger agrees with the CLI.
    """
    log_level = os.environ.get("REMOTECONFIG_LOG_LEVEL", "INFO")
    json_format = os.environ.get("REMOTECONFIG_LOG_FORMAT", "json").lower() == "json"

    logger = setup_logging(service_name, log_level, json_format)
    return ServiceLoggerAdapter(logger, {"service": service_name})


def configure_logging(log_level: str, log_format: str) -> None:
    """
    Apply level and format to every logger created so far and to the
    ones created later through get_service_logger().
    """
    os.environ["REMOTECONFIG_LOG_LEVEL"] = log_level
    os.environ["REMOTECONFIG_LOG_FORMAT"] = log_format

    json_format = log_format.lower() == "json"
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("remoteconfig."):
            setup_logging(name[len("remoteconfig."):], log_level, json_format)


_log_context: ContextVar[dict[str, Any]] = ContextVar("remoteconfig_log_context", default={})
_factory_installed = False


def _install_record_factory() -> None:
    """Wrap the active record factory once so records pick up LogContext fields"""
    global _factory_installed
    if _factory_installed:
        return
    original = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = original(*args, **kwargs)
        for key, value in _log_context.get().items():
            setattr(record, key, value)
        return record

    logging.setLogRecordFactory(record_factory)
    _factory_installed = True


class LogContext:
    """
    Context manager for adding temporary context to logs.

    The fields live in a context variable, so they only reach records
    created by the current task (and tasks it starts), even across awaits.

    Usage:
        with LogContext(source="user"):
            logger.info("Refreshing config")
    """

    def __init__(self, **context: Any):
        self.context = context
        self._token: Token | None = None

    def __enter__(self):
        _install_record_factory()
        self._token = _log_context.set({**_log_context.get(), **self.context})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _log_context.reset(self._token)
        self._token = None
        return False


def log_config_values(
    logger: logging.LoggerAdapter,
    values: dict[str, Any],
    fetch_status: str,
    last_fetch_at: str | None,
) -> None:
    """Dump a set of config values at debug level"""
    logger.debug("=== Current Remote Config Values ===")
    for key, value in values.items():
        logger.debug(f"{key}: {value!r}", extra={"key": key, "value": value})
    logger.debug(f"Last fetch time: {last_fetch_at}")
    logger.debug(f"Fetch status: {fetch_status}")
