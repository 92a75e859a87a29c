from __future__ import annotations

import pytest

from suntimes.settings import SettingsError, load_settings


def test_defaults():
    settings = load_settings({})
    assert settings.log_level == "INFO"
    assert settings.cors_origins == ("*",)
    assert settings.sweep_interval_minutes == 60


def test_overrides():
    settings = load_settings(
        {
            "SUNTIMES_LOG_LEVEL": "debug",
            "SUNTIMES_CORS_ORIGINS": "https://a.example, https://b.example,",
            "SUNTIMES_SWEEP_INTERVAL_MINUTES": "15",
        }
    )
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ("https://a.example", "https://b.example")
    assert settings.sweep_interval_minutes == 15


@pytest.mark.parametrize(
    "env",
    [
        {"SUNTIMES_LOG_LEVEL": "LOUD"},
        {"SUNTIMES_SWEEP_INTERVAL_MINUTES": "abc"},
        {"SUNTIMES_SWEEP_INTERVAL_MINUTES": "7"},
        {"SUNTIMES_SWEEP_INTERVAL_MINUTES": "0"},
    ],
)
def test_invalid_values(env):
    with pytest.raises(SettingsError):
        load_settings(env)
