"""Settings management for the Schlep-engine client.

Settings are read from constructor arguments, ``SCHLEP_*`` environment
variables and an optional YAML file, in that order of priority.

Example:
    >>> from schlep_engine.config import load_settings
    >>> settings = load_settings()
    >>> print(settings.base_url)
    https://api.schlep-engine.com/v1
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

import httpx
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from schlep_engine.config.exceptions import (
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
)
from schlep_engine.exceptions import ConfigurationError
from schlep_engine.observability import LogLevel


if TYPE_CHECKING:
    from collections.abc import Sequence


__all__ = [
    "API_KEY_ENV_VAR",
    "BASE_URL_ENV_VAR",
    "DEFAULT_BASE_URL",
    "Settings",
    "clear_settings_cache",
    "find_config_file",
    "get_settings",
    "load_settings",
]


DEFAULT_BASE_URL = "https://api.schlep-engine.com/v1"
API_KEY_ENV_VAR = "SCHLEP_API_KEY"
BASE_URL_ENV_VAR = "SCHLEP_BASE_URL"


# ---------------------------------------------------------------------------
# Environment Variable Interpolation
# ---------------------------------------------------------------------------

# ${VAR} and ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _interpolate_env_vars(value: object) -> object:
    """Recursively interpolate ${VAR} and ${VAR:-default} in strings.

    Args:
        value: Value to interpolate (string, dict, list, or other).

    Returns:
        Value with environment variables interpolated. Unset variables
        without a default become empty strings.

    Example:
        >>> os.environ["MY_KEY"] = "secret123"
        >>> _interpolate_env_vars("${MY_KEY}")
        'secret123'
        >>> _interpolate_env_vars("${MISSING:-fallback}")
        'fallback'
    """
    if isinstance(value, str):

        def replace(match: re.Match[str]) -> str:
            env_value = os.environ.get(match.group(1))
            if env_value is not None:
                return env_value
            default = match.group(2)
            return default if default is not None else ""

        return _ENV_VAR_PATTERN.sub(replace, value)

    if isinstance(value, dict):
        return {k: _interpolate_env_vars(v) for k, v in value.items()}

    if isinstance(value, list):
        return [_interpolate_env_vars(item) for item in value]

    return value


class _InterpolatingYamlConfigSettingsSource(YamlConfigSettingsSource):
    """YAML settings source that interpolates environment variables."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | str | None = None,
    ) -> None:
        if yaml_file is not None:
            super().__init__(settings_cls, yaml_file=yaml_file)
        else:
            super().__init__(settings_cls)

    def _read_files(
        self,
        files: Path | str | Sequence[Path | str] | None,
    ) -> dict[str, Any]:
        raw_data = super()._read_files(files)
        interpolated = _interpolate_env_vars(raw_data)
        if not isinstance(interpolated, dict):  # pragma: no cover
            return {}
        return interpolated


# ---------------------------------------------------------------------------
# Settings Class
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Client settings loaded from environment variables and YAML.

    Priority order (highest to lowest):
    1. Constructor arguments
    2. Environment variables (``SCHLEP_API_KEY``, ``SCHLEP_BASE_URL``, ...)
    3. YAML configuration file
    4. Default values

    Attributes:
        api_key: API key sent as a bearer token.
        base_url: Base URL of the API, without trailing slash.
        connect_timeout: Connect timeout in seconds.
        read_timeout: Read timeout in seconds.
        write_timeout: Write timeout in seconds.
        log_level: Log level used by the CLI.
    """

    model_config = SettingsConfigDict(
        yaml_file=None,
        yaml_file_encoding="utf-8",
        env_prefix="SCHLEP_",
        extra="ignore",
        validate_default=True,
    )

    CONFIG_SEARCH_PATHS: ClassVar[list[Path]] = [
        Path("schlep.yaml"),
        Path("schlep.yml"),
        Path.home() / ".config" / "schlep" / "config.yaml",
    ]

    # Set by load_settings() for the duration of one instantiation
    _yaml_file_override: ClassVar[Path | str | None] = None

    api_key: str | None = Field(
        default=None,
        description="API key (supports ${VAR} interpolation in YAML)",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the Schlep-engine API",
    )
    connect_timeout: float = Field(default=30.0, gt=0)
    read_timeout: float = Field(default=60.0, gt=0)
    write_timeout: float = Field(default=60.0, gt=0)
    log_level: LogLevel = Field(default=LogLevel.INFO)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Remove trailing slash from URL to avoid double slashes."""
        return v.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept log levels in any case (``DEBUG``, ``debug``)."""
        if isinstance(v, str):
            return v.lower()
        return v

    @property
    def timeout(self) -> httpx.Timeout:
        """Transport timeouts built from the individual settings."""
        return httpx.Timeout(
            self.read_timeout,
            connect=self.connect_timeout,
            read=self.read_timeout,
            write=self.write_timeout,
        )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Order sources: init, environment, YAML, file secrets.

        dotenv is excluded; YAML files take its place.
        """
        return (
            init_settings,
            env_settings,
            _InterpolatingYamlConfigSettingsSource(
                settings_cls,
                yaml_file=cls._yaml_file_override,
            ),
            file_secret_settings,
        )


# ---------------------------------------------------------------------------
# Settings Loading Functions
# ---------------------------------------------------------------------------

_cached_settings: Settings | None = None


def find_config_file(config_path: Path | str | None = None) -> Path | None:
    """Find the configuration file.

    Args:
        config_path: Explicit path to a config file, or None to search
            the default locations.

    Returns:
        Path to the config file if found, None otherwise.
    """
    if config_path is not None:
        path = Path(config_path)
        return path if path.is_file() else None

    for search_path in Settings.CONFIG_SEARCH_PATHS:
        if search_path.is_file():
            return search_path

    return None


def load_settings(
    config_path: Path | str | None = None,
    *,
    require_config_file: bool = False,
) -> Settings:
    """Load and validate settings, caching them for :func:`get_settings`.

    Args:
        config_path: Path to a YAML config file. If None, searches
            ./schlep.yaml, ./schlep.yml and ~/.config/schlep/config.yaml.
        require_config_file: Raise when no config file is found. Also
            implied when ``config_path`` is given explicitly.

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationFileNotFoundError: When a config file is required
            (or named explicitly) and cannot be found.
        ConfigurationValidationError: When validation fails.
    """
    global _cached_settings  # noqa: PLW0603

    config_file = find_config_file(config_path)

    if config_file is None and (require_config_file or config_path is not None):
        raise ConfigurationFileNotFoundError(
            path=str(config_path) if config_path else None,
            searched_paths=[str(p) for p in Settings.CONFIG_SEARCH_PATHS],
        )

    try:
        Settings._yaml_file_override = config_file  # noqa: SLF001
        try:
            settings = Settings()
        finally:
            Settings._yaml_file_override = None  # noqa: SLF001
    except ConfigurationError:
        raise
    except ValidationError as exc:
        msg = f"Invalid configuration: {exc.error_count()} error(s)"
        raise ConfigurationValidationError(
            msg,
            errors=[dict(e) for e in exc.errors()],
        ) from exc
    except Exception as exc:
        msg = f"Failed to load configuration: {exc}"
        raise ConfigurationValidationError(msg) from exc

    _cached_settings = settings
    return settings


def get_settings() -> Settings:
    """Get the cached settings instance, loading it if necessary."""
    global _cached_settings  # noqa: PLW0603

    if _cached_settings is None:
        _cached_settings = load_settings()

    return _cached_settings


def clear_settings_cache() -> None:
    """Clear the cached settings instance (mainly for tests)."""
    global _cached_settings  # noqa: PLW0603
    _cached_settings = None
