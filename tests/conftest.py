"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
import structlog

from schlep_engine import SchlepClient
from schlep_engine.config import clear_settings_cache


if TYPE_CHECKING:
    from collections.abc import Generator


BASE_URL = "https://api.schlep.test/v1"
API_KEY = "sk-test-12345"

_ENV_VARS = (
    "SCHLEP_API_KEY",
    "SCHLEP_BASE_URL",
    "SCHLEP_CONNECT_TIMEOUT",
    "SCHLEP_READ_TIMEOUT",
    "SCHLEP_WRITE_TIMEOUT",
    "SCHLEP_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from SCHLEP_* variables and cached settings."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop logging configuration that points at a closed capture stream."""
    yield
    structlog.reset_defaults()
    for handler in logging.root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            logging.root.removeHandler(handler)
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.NOTSET)


@pytest.fixture
def base_url() -> str:
    """Base URL for test clients."""
    return BASE_URL


@pytest.fixture
def api_key() -> str:
    """API key for test clients."""
    return API_KEY


@pytest.fixture
def client(base_url: str, api_key: str) -> Generator[SchlepClient, None, None]:
    """Blocking test client."""
    with SchlepClient(api_key, base_url) as c:
        yield c
