"""Tests for application settings."""

import os
from unittest.mock import patch

import pytest

from dingtalk_webhook.config import (
    DEFAULT_API_URL,
    Settings,
    get_settings,
    set_settings,
)


@pytest.fixture(autouse=True)
def reset_settings():
    """Reset the global settings around each test."""
    set_settings(None)
    yield
    set_settings(None)


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self):
        """Test defaults with an empty environment."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()

        assert settings.DINGTALK_ACCESS_TOKEN == ""
        assert settings.DINGTALK_API_URL == DEFAULT_API_URL
        assert settings.DINGTALK_SECRET is None
        assert settings.DINGTALK_TIMEOUT is None
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_JSON is False

    def test_from_env(self):
        """Test values are read from the environment."""
        env = {
            "DINGTALK_ACCESS_TOKEN": "tok",
            "DINGTALK_API_URL": "http://localhost/robot/send",
            "DINGTALK_SECRET": "SECabc",
            "DINGTALK_TIMEOUT": "2.5",
            "LOG_LEVEL": "DEBUG",
            "LOG_JSON": "yes",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        assert settings.DINGTALK_ACCESS_TOKEN == "tok"
        assert settings.DINGTALK_API_URL == "http://localhost/robot/send"
        assert settings.DINGTALK_SECRET == "SECabc"
        assert settings.DINGTALK_TIMEOUT == 2.5
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.LOG_JSON is True

    def test_empty_secret_is_none(self):
        """Test an empty secret disables signing."""
        with patch.dict(os.environ, {"DINGTALK_SECRET": ""}, clear=True):
            settings = Settings.from_env()

        assert settings.DINGTALK_SECRET is None

    def test_invalid_timeout(self):
        """Test a non-numeric timeout is rejected."""
        with patch.dict(os.environ, {"DINGTALK_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(ValueError, match="DINGTALK_TIMEOUT"):
                Settings.from_env()


class TestGlobalSettings:
    """Tests for the global settings accessor."""

    def test_get_settings_cached(self):
        """Test the global settings are loaded once."""
        first = get_settings()
        second = get_settings()

        assert first is second

    def test_set_settings(self):
        """Test replacing the global settings."""
        custom = Settings(DINGTALK_ACCESS_TOKEN="custom")
        set_settings(custom)

        assert get_settings() is custom
