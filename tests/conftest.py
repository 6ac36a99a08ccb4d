"""Shared test fixtures for sugarkit."""

import pytest

from sugarkit.datekit import DateKit, DateKitConfig


@pytest.fixture
def config():
    """Toolkit configuration matching the library defaults."""
    return DateKitConfig(default_zone="UTC+8", default_format="yyyy-MM-dd HH:mm:ss")


@pytest.fixture
def kit(config):
    """Fresh DateKit with an explicit configuration.

    Independent of SUGARKIT_* environment variables so each test starts
    from the same defaults.
    """
    return DateKit(config)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove SUGARKIT_* variables so Settings() sees only its defaults."""
    for name in ("SUGARKIT_DEFAULT_ZONE", "SUGARKIT_DEFAULT_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
