"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
import os

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.service_urls == []
        assert settings.trust_store == ""
        assert settings.user_agent == "paywire-client/0.1.0"
        assert settings.request_timeout == 30.0
        assert settings.protocol_version == "recurring"

    def test_loads_from_env(self):
        """Settings should load BILLING_* environment variables."""
        with patch.dict(os.environ, {
            "BILLING_SERVICE_URLS": '["https://a.example.test", "https://b.example.test"]',
            "BILLING_USER": "+15550001111",
            "BILLING_PASSWORD": "secret",
            "BILLING_REQUEST_TIMEOUT": "5",
        }):
            settings = Settings(_env_file=None)
            assert settings.service_urls == ["https://a.example.test", "https://b.example.test"]
            assert settings.user == "+15550001111"
            assert settings.password == "secret"
            assert settings.request_timeout == 5.0

    def test_rejects_unknown_protocol_version(self):
        """Only known protocol versions are accepted."""
        with patch.dict(os.environ, {"BILLING_PROTOCOL_VERSION": "v3"}):
            with pytest.raises(ValueError):
                Settings(_env_file=None)


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        assert isinstance(get_settings(), Settings)

    def test_get_settings_is_cached(self):
        """get_settings should return the same instance on repeated calls."""
        assert get_settings() is get_settings()
