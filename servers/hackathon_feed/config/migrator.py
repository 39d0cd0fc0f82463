"""
Configuration defaults, validation and migration.

Handles version migrations:
- v1 -> v2: flat source list and timeout became per-source settings,
  `sequential` flag became the `concurrency` mode
"""

from typing import Any

import structlog

from ..aggregator import CONCURRENCY_MODES, CONCURRENT, SEQUENTIAL
from ..sources import SOURCE_REGISTRY
from ..sources.base import DEFAULT_SOURCE_TIMEOUT, MAX_EVENTS
from ..sources.transport import DEFAULT_RENDER_TIMEOUT, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

log = structlog.get_logger(__name__)

CURRENT_VERSION = 2

# Rendering a page takes far longer than an API call
SOURCE_TIMEOUTS = {"devfolio": 60.0}


def get_default_config() -> dict[str, Any]:
    """Return default config for a fresh installation."""
    return {
        "version": CURRENT_VERSION,
        "concurrency": CONCURRENT,
        "max_events_per_source": MAX_EVENTS,
        "transport": {
            "timeout_seconds": DEFAULT_TIMEOUT,
            "render_timeout_seconds": DEFAULT_RENDER_TIMEOUT,
            "user_agent": DEFAULT_USER_AGENT,
        },
        "sources": {
            name: _default_source(name) for name in SOURCE_REGISTRY
        },
    }


def _default_source(name: str) -> dict[str, Any]:
    source = {
        "enabled": True,
        "timeout_seconds": SOURCE_TIMEOUTS.get(name, DEFAULT_SOURCE_TIMEOUT),
    }
    if name == "mlh":
        source["season"] = None  # current year
    return source


def migrate_config(config: dict[str, Any]) -> dict[str, Any]:
    """
    Migrate config from any version to current.

    Args:
        config: Raw config dict (may be any version)

    Returns:
        Config dict at CURRENT_VERSION, or the input unchanged when its version
        is current, newer or malformed (validate_config reports the latter two)
    """
    version = config.get("version", 1)

    if not _known_version(version) or version == CURRENT_VERSION:
        return config

    log.info("migrating_config", from_version=version, to_version=CURRENT_VERSION)

    if version == 1:
        config = _migrate_v1_to_v2(config)

    config["version"] = CURRENT_VERSION
    return config


def _known_version(version: Any) -> bool:
    return isinstance(version, int) and not isinstance(version, bool) and 1 <= version <= CURRENT_VERSION


def _migrate_v1_to_v2(config: dict[str, Any]) -> dict[str, Any]:
    """
    Migrate v1 config to v2 format.

    Changes:
    - sources (list[str]) -> sources (dict[name, {enabled, timeout_seconds}])
    - timeout (float) -> per-source timeout_seconds
    - sequential (bool) -> concurrency ("concurrent" | "sequential")
    - mlh_season (int) -> sources.mlh.season
    """
    migrated = config.copy()
    timeout = migrated.pop("timeout", None)

    old_sources = config.get("sources")
    if isinstance(old_sources, list):
        enabled = {name.lower() for name in old_sources}
        migrated["sources"] = {
            name: {
                "enabled": name in enabled,
                "timeout_seconds": timeout or SOURCE_TIMEOUTS.get(name, DEFAULT_SOURCE_TIMEOUT),
            }
            for name in SOURCE_REGISTRY
        }
        unknown = sorted(enabled - set(SOURCE_REGISTRY))
        for name in unknown:
            migrated["sources"][name] = {"enabled": True}
        log.info("migrated_source_list", enabled=sorted(enabled))

    if "sequential" in migrated:
        sequential = migrated.pop("sequential")
        migrated["concurrency"] = SEQUENTIAL if sequential else CONCURRENT
        log.info("migrated_sequential_flag", concurrency=migrated["concurrency"])

    if "mlh_season" in migrated:
        season = migrated.pop("mlh_season")
        migrated.setdefault("sources", {}).setdefault("mlh", {})["season"] = season

    return migrated


def validate_config(config: dict[str, Any]) -> list[str]:
    """
    Validate config and return list of errors.

    Returns:
        List of error messages (empty if valid)
    """
    errors: list[str] = []

    version = config.get("version", 1)
    if not isinstance(version, int) or isinstance(version, bool) or version < 1:
        errors.append(f"Invalid config version: {version!r}")
    elif version > CURRENT_VERSION:
        errors.append(
            f"Config version {version} is newer than supported version {CURRENT_VERSION}"
        )

    concurrency = config.get("concurrency", CONCURRENT)
    if concurrency not in CONCURRENCY_MODES:
        errors.append(
            f"Invalid concurrency: {concurrency!r} (must be one of {', '.join(CONCURRENCY_MODES)})"
        )

    max_events = config.get("max_events_per_source", MAX_EVENTS)
    if not isinstance(max_events, int) or isinstance(max_events, bool) or max_events <= 0:
        errors.append(f"Invalid max_events_per_source: {max_events} (must be a positive integer)")

    transport = config.get("transport", {})
    if not isinstance(transport, dict):
        errors.append("transport must be a mapping of transport settings")
    else:
        for key in ("timeout_seconds", "render_timeout_seconds"):
            value = transport.get(key)
            if value is not None and not _positive_number(value):
                errors.append(f"Invalid transport.{key}: {value} (must be > 0)")

    sources = config.get("sources", {})
    if not isinstance(sources, dict):
        errors.append("sources must be a mapping of source name to settings")
        return errors

    for name, settings in sources.items():
        if name not in SOURCE_REGISTRY:
            errors.append(f"Unknown source: {name}")
            continue
        if not isinstance(settings, dict):
            errors.append(f"sources.{name} must be a mapping")
            continue
        timeout = settings.get("timeout_seconds")
        if timeout is not None and not _positive_number(timeout):
            errors.append(f"Invalid sources.{name}.timeout_seconds: {timeout} (must be > 0)")

    if sources and not any(
        s.get("enabled", True) for s in sources.values() if isinstance(s, dict)
    ):
        errors.append("At least one source must be enabled")

    return errors


def _positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
