"""
Configuration loader — reads autostubs.yml and the schema export.

Both files are YAML, validated against Pydantic models. Relative paths
in autostubs.yml are taken relative to the file itself.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from autostubs.core.models.schema import Schema
from autostubs.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "autostubs.yml"

# Directories searched upward from the start directory
_MAX_DEPTH = 20


class ConfigError(Exception):
    """Raised when configuration or schema is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for autostubs.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to autostubs.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()
    for directory in [current, *current.parents][:_MAX_DEPTH]:
        candidate = directory / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"File not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate generator settings.

    Args:
        path: Explicit path to autostubs.yml. If None, searches upward;
            when nothing is found the defaults apply, anchored at the cwd.

    Raises:
        ConfigError: If the file is unreadable or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found — using defaults", CONFIG_FILE)
        return Settings().resolve_paths(Path.cwd())

    logger.debug("Loading settings from %s", path)
    data = _read_yaml(path)

    try:
        settings = Settings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    return settings.resolve_paths(path.parent.resolve())


def load_schema(path: Path) -> Schema:
    """Load the schema export (fields, fieldgroups, templates).

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    logger.debug("Loading schema from %s", path)
    data = _read_yaml(path)

    try:
        schema = Schema.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid schema in {path}: {e}") from e

    logger.info(
        "Loaded schema with %d templates, %d fields",
        len(schema.templates), len(schema.fields),
    )
    return schema
