"""Configuration loading, validation and migration."""

from .loader import CONFIG_ENV_VAR, CONCURRENCY_ENV_VAR, ConfigError, load_config
from .migrator import CURRENT_VERSION, get_default_config, migrate_config, validate_config

__all__ = [
    "CONFIG_ENV_VAR",
    "CONCURRENCY_ENV_VAR",
    "CURRENT_VERSION",
    "ConfigError",
    "get_default_config",
    "load_config",
    "migrate_config",
    "validate_config",
]
