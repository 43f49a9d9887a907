"""Configuration management for Parakeet."""

from .exceptions import ConfigError
from .manager import DEFAULT_CONFIG_PATH, ENV_PREFIX, ConfigManager, overrides_from_env
from .models import ParakeetConfig
from .resolver import resolve_with_precedence, set_path

__all__ = [
    "ConfigError",
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "ParakeetConfig",
    "overrides_from_env",
    "resolve_with_precedence",
    "set_path",
]
