"""Tests for billing client configuration."""

import pytest
from pydantic import ValidationError

from modules.billing.config import BillingClientConfig, ServiceUrl
from modules.billing.models import ProtocolVersion


class TestServiceUrl:
    def test_trailing_slash_stripped(self):
        """Base URLs should be normalized."""
        assert ServiceUrl(url="https://billing.example.test/").url == "https://billing.example.test"

    def test_rejects_non_http(self):
        """Only http(s) URLs are accepted."""
        with pytest.raises(ValidationError):
            ServiceUrl(url="ftp://billing.example.test")


class TestBillingClientConfig:
    def test_from_urls(self):
        """Should accept several candidate URLs."""
        config = BillingClientConfig.from_urls(
            ["https://a.example.test", ServiceUrl(url="https://b.example.test")],
            "+15550001111",
            "secret",
            "ua/1.0",
        )
        assert [u.url for u in config.urls] == ["https://a.example.test", "https://b.example.test"]
        assert all(u.trust_store is None for u in config.urls)
        assert config.protocol_version == ProtocolVersion.RECURRING
        assert config.timeout == 30.0

    def test_pinned(self):
        """Should attach trust material to a single URL."""
        config = BillingClientConfig.pinned(
            "https://billing.example.test",
            "-----BEGIN CERTIFICATE-----\nMIIB\n-----END CERTIFICATE-----\n",
            "+15550001111",
            "secret",
            "ua/1.0",
            protocol_version=ProtocolVersion.BASIC,
        )
        assert len(config.urls) == 1
        assert config.urls[0].trust_store.startswith("-----BEGIN")
        assert config.protocol_version == ProtocolVersion.BASIC

    def test_pinned_requires_trust_store(self):
        """A pinned configuration without trust material is an error."""
        with pytest.raises(ValueError):
            BillingClientConfig.pinned("https://billing.example.test", "", "+1555", "secret", "ua")

    def test_requires_url(self):
        """At least one URL is required."""
        with pytest.raises(ValidationError):
            BillingClientConfig.from_urls([], "+15550001111", "secret", "ua/1.0")

    def test_requires_user_and_agent(self):
        """Principal and user agent are required."""
        with pytest.raises(ValidationError):
            BillingClientConfig.from_urls(["https://a.example.test"], "", "secret", "ua/1.0")
        with pytest.raises(ValidationError):
            BillingClientConfig.from_urls(["https://a.example.test"], "+1555", "secret", "")

    def test_password_hidden(self, client_config):
        """The shared secret should not leak through repr."""
        assert "test-shared-secret" not in repr(client_config)
        assert client_config.password.get_secret_value() == "test-shared-secret"

    def test_immutable(self, client_config):
        """Configuration cannot change after construction."""
        with pytest.raises(ValidationError):
            client_config.user = "+1999"
