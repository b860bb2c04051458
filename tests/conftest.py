"""Shared test fixtures."""

import pytest

from hostaddr.config import get_settings

SETTINGS_ENV_VARS = (
    "HOSTADDR_LOG",
    "HOSTADDR_LOG_DIR",
    "HOSTADDR_FORMAT_IPV6_COMPRESSION",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Run each test against default settings, whatever the caller's environment."""
    for var in SETTINGS_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def use_settings(monkeypatch):
    """Set HOSTADDR_* variables and reload settings.

    Usage:
      use_settings(HOSTADDR_FORMAT_IPV6_COMPRESSION="first")
    """

    def _apply(**env: str) -> None:
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        get_settings.cache_clear()

    return _apply
