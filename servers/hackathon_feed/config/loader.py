"""
Load configuration from defaults, an optional JSON file and the environment.

Precedence (lowest to highest): built-in defaults, config file, environment.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

import structlog

from .migrator import get_default_config, migrate_config, validate_config

log = structlog.get_logger(__name__)

CONFIG_ENV_VAR = "HACKATHON_FEED_CONFIG"
CONCURRENCY_ENV_VAR = "HACKATHON_FEED_CONCURRENCY"


class ConfigError(ValueError):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(self, errors: list[str]):
        super().__init__("Invalid configuration: " + "; ".join(errors))
        self.errors = errors


def load_config(path: Optional[Path] = None) -> dict[str, Any]:
    """
    Build the effective configuration.

    Args:
        path: JSON config file; falls back to $HACKATHON_FEED_CONFIG, then defaults only

    Returns:
        Validated config dict at the current version

    Raises:
        ConfigError: If the file is unreadable or the result fails validation
    """
    config = get_default_config()

    if path is None and os.environ.get(CONFIG_ENV_VAR):
        path = Path(os.environ[CONFIG_ENV_VAR])

    if path is not None:
        config = _deep_merge(config, migrate_config(_read_json(Path(path))))
        log.info("config_loaded", path=str(path))

    concurrency = os.environ.get(CONCURRENCY_ENV_VAR)
    if concurrency:
        config["concurrency"] = concurrency.strip().lower()

    errors = validate_config(config)
    if errors:
        raise ConfigError(errors)
    return config


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError([f"Cannot read config file {path}: {e}"]) from e
    except json.JSONDecodeError as e:
        raise ConfigError([f"Config file {path} is not valid JSON: {e}"]) from e

    if not isinstance(data, dict):
        raise ConfigError([f"Config file {path} must contain a JSON object"])
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
