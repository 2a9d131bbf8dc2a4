"""Configuration module for the Schlep-engine client.

Settings come from ``SCHLEP_*`` environment variables and an optional YAML
file. YAML values support ${VAR} and ${VAR:-default} interpolation.

Example:
    >>> from schlep_engine import SchlepClient
    >>> from schlep_engine.config import load_settings
    >>>
    >>> settings = load_settings("schlep.yaml")
    >>> client = SchlepClient.from_settings(settings)
"""

from __future__ import annotations

from schlep_engine.config.exceptions import (
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
)
from schlep_engine.config.settings import (
    API_KEY_ENV_VAR,
    BASE_URL_ENV_VAR,
    DEFAULT_BASE_URL,
    Settings,
    clear_settings_cache,
    find_config_file,
    get_settings,
    load_settings,
)
from schlep_engine.exceptions import ConfigurationError


__all__ = [
    "API_KEY_ENV_VAR",
    "BASE_URL_ENV_VAR",
    "DEFAULT_BASE_URL",
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "Settings",
    "clear_settings_cache",
    "find_config_file",
    "get_settings",
    "load_settings",
]
