"""Unit tests for the configuration module."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from schlep_engine.config import (
    DEFAULT_BASE_URL,
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    Settings,
    clear_settings_cache,
    find_config_file,
    get_settings,
    load_settings,
)
from schlep_engine.observability import LogLevel


if TYPE_CHECKING:
    from pathlib import Path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run each test where no ./schlep.yaml exists."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    """Create a sample configuration file."""
    config_file = tmp_path / "schlep.yaml"
    config_file.write_text("""
api_key: "yaml-key-123"
base_url: "https://yaml.schlep.test/v2/"
connect_timeout: 5
read_timeout: 15
write_timeout: 25
log_level: "DEBUG"
""")
    return config_file


@pytest.fixture
def config_with_interpolation(tmp_path: Path) -> Path:
    """Create a config file using environment variable interpolation."""
    config_file = tmp_path / "interp.yaml"
    config_file.write_text("""
api_key: "${TEST_SCHLEP_KEY}"
base_url: "${TEST_SCHLEP_URL:-https://default.schlep.test}"
""")
    return config_file


# ---------------------------------------------------------------------------
# Settings Defaults and Validation
# ---------------------------------------------------------------------------


class TestSettingsDefaults:
    """Tests for Settings defaults and validators."""

    def test_defaults(self) -> None:
        """Test default values."""
        settings = Settings()

        assert settings.api_key is None
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.connect_timeout == 30.0
        assert settings.read_timeout == 60.0
        assert settings.write_timeout == 60.0
        assert settings.log_level == LogLevel.INFO

    def test_strips_trailing_slash(self) -> None:
        """Test base URL normalization."""
        settings = Settings(base_url="https://x.test/api/")
        assert settings.base_url == "https://x.test/api"

    def test_log_level_case_insensitive(self) -> None:
        """Test log levels in upper case are accepted."""
        assert Settings(log_level="WARNING").log_level == LogLevel.WARNING

    def test_timeout_property(self) -> None:
        """Test the httpx timeout is built from the individual settings."""
        timeout = Settings(connect_timeout=1, read_timeout=2, write_timeout=3).timeout

        assert timeout.connect == 1
        assert timeout.read == 2
        assert timeout.write == 3

    def test_rejects_non_positive_timeout(self) -> None:
        """Test timeouts must be positive."""
        with pytest.raises(ValueError, match="greater than 0"):
            Settings(read_timeout=0)


# ---------------------------------------------------------------------------
# Settings Loading
# ---------------------------------------------------------------------------


class TestSettingsLoading:
    """Tests for settings loading functionality."""

    def test_load_settings_with_defaults(self) -> None:
        """Test loading settings with no config file."""
        settings = load_settings()

        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.api_key is None

    def test_load_settings_from_yaml(self, sample_config_yaml: Path) -> None:
        """Test loading settings from a YAML file."""
        settings = load_settings(sample_config_yaml)

        assert settings.api_key == "yaml-key-123"
        assert settings.base_url == "https://yaml.schlep.test/v2"
        assert settings.connect_timeout == 5
        assert settings.read_timeout == 15
        assert settings.write_timeout == 25
        assert settings.log_level == LogLevel.DEBUG

    def test_load_settings_requires_file(self) -> None:
        """Test that require_config_file=True raises when nothing is found."""
        with pytest.raises(ConfigurationFileNotFoundError) as exc_info:
            load_settings(require_config_file=True)

        assert "not found" in exc_info.value.message.lower()
        assert "schlep.yaml" in exc_info.value.message

    def test_load_settings_explicit_missing_file(self) -> None:
        """Test an explicitly named file must exist."""
        with pytest.raises(ConfigurationFileNotFoundError) as exc_info:
            load_settings("/nonexistent/schlep.yaml")

        assert exc_info.value.path == "/nonexistent/schlep.yaml"
        assert isinstance(exc_info.value, ConfigurationError)

    def test_load_settings_invalid_values(self, tmp_path: Path) -> None:
        """Test validation failures are wrapped."""
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("read_timeout: -1\nlog_level: loud\n")

        with pytest.raises(ConfigurationValidationError) as exc_info:
            load_settings(config_file)

        assert "2 error(s)" in exc_info.value.message
        assert len(exc_info.value.errors) == 2

    def test_finds_default_file(self, sample_config_yaml: Path) -> None:
        """Test ./schlep.yaml is picked up without an explicit path."""
        (sample_config_yaml.parent / "cwd" / "schlep.yaml").write_text(
            sample_config_yaml.read_text()
        )

        settings = load_settings()

        assert settings.api_key == "yaml-key-123"


class TestEnvironmentVariables:
    """Tests for SCHLEP_* overrides and ${VAR} interpolation."""

    def test_env_override(
        self,
        sample_config_yaml: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test environment variables take precedence over YAML."""
        monkeypatch.setenv("SCHLEP_API_KEY", "env-key")
        monkeypatch.setenv("SCHLEP_READ_TIMEOUT", "99")

        settings = load_settings(sample_config_yaml)

        assert settings.api_key == "env-key"
        assert settings.read_timeout == 99
        assert settings.base_url == "https://yaml.schlep.test/v2"

    def test_init_args_take_precedence(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test constructor arguments beat environment variables."""
        monkeypatch.setenv("SCHLEP_BASE_URL", "https://env.test")

        assert Settings(base_url="https://init.test").base_url == "https://init.test"

    def test_interpolation_with_value(
        self,
        config_with_interpolation: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test interpolation when environment variables are set."""
        monkeypatch.setenv("TEST_SCHLEP_KEY", "interp-key")
        monkeypatch.setenv("TEST_SCHLEP_URL", "https://env-url.test")

        settings = load_settings(config_with_interpolation)

        assert settings.api_key == "interp-key"
        assert settings.base_url == "https://env-url.test"

    def test_interpolation_with_default(
        self,
        config_with_interpolation: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test interpolation uses the default when the variable is unset."""
        monkeypatch.setenv("TEST_SCHLEP_KEY", "interp-key")
        monkeypatch.delenv("TEST_SCHLEP_URL", raising=False)

        settings = load_settings(config_with_interpolation)

        assert settings.base_url == "https://default.schlep.test"

    def test_interpolation_empty_when_missing(
        self,
        config_with_interpolation: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test a missing variable without default becomes an empty string."""
        monkeypatch.delenv("TEST_SCHLEP_KEY", raising=False)

        settings = load_settings(config_with_interpolation)

        assert settings.api_key == ""


# ---------------------------------------------------------------------------
# Caching
# ---------------------------------------------------------------------------


class TestSettingsCaching:
    """Tests for settings caching behavior."""

    def test_get_settings_caches(self) -> None:
        """Test that get_settings returns cached instance."""
        assert get_settings() is get_settings()

    def test_clear_settings_cache(self) -> None:
        """Test that clear_settings_cache clears the cache."""
        settings1 = get_settings()
        clear_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2

    def test_load_settings_updates_cache(self, sample_config_yaml: Path) -> None:
        """Test that load_settings updates the cache."""
        settings1 = get_settings()
        settings2 = load_settings(sample_config_yaml)

        assert get_settings() is settings2
        assert settings2 is not settings1


# ---------------------------------------------------------------------------
# Find Config File
# ---------------------------------------------------------------------------


class TestFindConfigFile:
    """Tests for find_config_file function."""

    def test_find_explicit_path(self, sample_config_yaml: Path) -> None:
        """Test finding config at explicit path."""
        assert find_config_file(sample_config_yaml) == sample_config_yaml

    def test_find_explicit_path_string(self, sample_config_yaml: Path) -> None:
        """Test finding config at explicit path as string."""
        assert find_config_file(str(sample_config_yaml)) == sample_config_yaml

    def test_find_nonexistent_returns_none(self) -> None:
        """Test that nonexistent path returns None."""
        assert find_config_file("/nonexistent/schlep.yaml") is None

    def test_find_yml_extension(self, tmp_path: Path) -> None:
        """Test ./schlep.yml is searched too."""
        config_file = tmp_path / "cwd" / "schlep.yml"
        config_file.write_text("read_timeout: 10\n")

        result = find_config_file(None)

        assert result is not None
        assert result.resolve() == config_file.resolve()


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TestExceptions:
    """Tests for configuration exceptions."""

    def test_configuration_file_not_found_error(self) -> None:
        """Test ConfigurationFileNotFoundError with searched paths."""
        exc = ConfigurationFileNotFoundError(searched_paths=["/a", "/b"])

        assert exc.path is None
        assert exc.searched_paths == ["/a", "/b"]
        assert "/a, /b" in exc.message

    def test_configuration_file_not_found_error_path(self) -> None:
        """Test ConfigurationFileNotFoundError with just a path."""
        exc = ConfigurationFileNotFoundError(path="/path/to/schlep.yaml")
        assert exc.message == "Configuration file not found: /path/to/schlep.yaml"

    def test_configuration_validation_error(self) -> None:
        """Test ConfigurationValidationError."""
        errors: list[dict[str, object]] = [{"loc": ["field"], "msg": "invalid"}]
        exc = ConfigurationValidationError("Validation failed", errors=errors)

        assert exc.message == "Validation failed"
        assert exc.errors == errors
        assert ConfigurationValidationError("x").errors == []
