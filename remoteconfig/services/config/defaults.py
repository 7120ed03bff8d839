"""
Default Table

Loads the bundled (key, type, value) defaults once at startup.
Any problem in the resource is fatal: a partially loaded table is
never returned.
"""

from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from remoteconfig.common.exceptions import ConfigLoadError
from remoteconfig.common.logging_setup import get_service_logger

from .keys import KNOWN_KEYS
from .values import ConfigValue, ValueType, parse_literal, value_type_of

logger = get_service_logger("config.defaults")

DefaultTable = Mapping[str, ConfigValue]

BUNDLED_DEFAULTS_PATH = Path(__file__).resolve().parents[2] / "resources" / "remote_config_defaults.yaml"


def build_default_table(values: Mapping[str, ConfigValue]) -> DefaultTable:
    """
    Build an immutable DefaultTable from an in-memory mapping.

    Raises:
        ConfigLoadError: if a key is not a string or a value is not one
            of the four config value types
    """
    table: dict[str, ConfigValue] = {}
    for key, value in values.items():
        if not isinstance(key, str) or not key:
            raise ConfigLoadError(f"Invalid key: {key!r}")
        try:
            value_type_of(value)
        except TypeError as e:
            raise ConfigLoadError(f"{key}: {e}")
        table[key] = value
    return MappingProxyType(table)


def parse_defaults(
    document: Any,
    source: str = "<memory>",
    required_keys: Iterable[str] = (),
) -> DefaultTable:
    """
    Validate a parsed defaults document and build the table.

    All errors are collected before failing so the resource author sees
    every problem at once.

    Args:
        document: Parsed YAML, expected as {"defaults": [{key, type, value}, ...]}
        source: Where the document came from (for messages)
        required_keys: Keys that must be present

    Raises:
        ConfigLoadError: if the document is malformed in any way
    """
    if not isinstance(document, dict) or not isinstance(document.get("defaults"), list):
        raise ConfigLoadError("expected a top-level 'defaults' list", source)

    errors: list[str] = []
    table: dict[str, ConfigValue] = {}

    for i, entry in enumerate(document["defaults"]):
        if not isinstance(entry, dict):
            errors.append(f"defaults[{i}]: entry must be a mapping")
            continue

        key = entry.get("key")
        if not isinstance(key, str) or not key:
            errors.append(f"defaults[{i}]: missing key")
            continue
        if key in table:
            errors.append(f"{key}: duplicate key")
            continue

        try:
            value_type = ValueType(entry.get("type"))
        except ValueError:
            errors.append(f"{key}: unknown type {entry.get('type')!r}")
            continue

        try:
            table[key] = parse_literal(value_type, entry.get("value"))
        except ValueError as e:
            errors.append(f"{key}: {e}")

    missing = [key for key in required_keys if key not in table]
    if missing:
        errors.append(f"missing keys: {', '.join(missing)}")

    if errors:
        logger.error(
            f"Defaults validation failed: {len(errors)} errors",
            extra={"errors": errors, "source": source},
        )
        raise ConfigLoadError("; ".join(errors), source)

    return MappingProxyType(table)


def load_defaults(
    path: str | Path | None = None,
    required_keys: Iterable[str] | None = None,
) -> DefaultTable:
    """
    Load the Default Table from a YAML resource.

    Args:
        path: Resource path; the bundled resource when omitted
        required_keys: Keys that must be present. Defaults to the known
            key catalog for the bundled resource and to none otherwise.

    Returns:
        Immutable key -> value mapping

    Raises:
        ConfigLoadError: if the file is missing, unparseable or invalid
    """
    resource = Path(path) if path else BUNDLED_DEFAULTS_PATH
    if required_keys is None:
        required_keys = KNOWN_KEYS if path is None else ()

    try:
        with open(resource, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigLoadError("file not found", str(resource))
    except (yaml.YAMLError, OSError) as e:
        raise ConfigLoadError(f"cannot parse: {e}", str(resource))

    table = parse_defaults(document, str(resource), required_keys)
    logger.info(
        f"Default values loaded ({len(table)} keys)",
        extra={"source": str(resource), "key_count": len(table)},
    )
    return table
