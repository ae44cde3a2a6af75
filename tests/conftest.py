"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from unittest.mock import MagicMock

from shared.config import get_settings
from modules.billing.client import BillingClient, reset_billing_client
from modules.billing.config import BillingClientConfig
from modules.billing.interfaces import IBillingTransport


TEST_USER = "+15550001111"
TEST_PASSWORD = "test-shared-secret"
TEST_USER_AGENT = "paywire-tests/1.0"


def make_link_payload(**overrides) -> dict:
    """
    Build a link record as the proxy sends it (wire field names).

    Args:
        **overrides: Wire fields to replace or add
    """
    payload = {
        "id": "link-123",
        "name": "Corner Bakery",
        "created": 1700000000,
        "stripe_user_id": "acct_1AbCdEfGhIjKlMn",
        "token_type": "bearer",
        "stripe_publishable_key": "pk_test_abc123",
        "scope": "read_write",
        "livemode": False,
        "refresh_token": "rt_test_456",
        "access_token": "sk_test_789",
    }
    payload.update(overrides)
    return payload


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the client singleton around each test."""
    get_settings.cache_clear()
    reset_billing_client()
    yield
    get_settings.cache_clear()
    reset_billing_client()


@pytest.fixture
def link_payload() -> dict:
    """A complete link record using wire field names."""
    return make_link_payload()


@pytest.fixture
def transport() -> MagicMock:
    """A transport double that records every call."""
    return MagicMock(spec=IBillingTransport)


@pytest.fixture
def client(transport) -> BillingClient:
    """A RECURRING client over the transport double."""
    return BillingClient(transport)


@pytest.fixture
def client_config() -> BillingClientConfig:
    """A single-URL configuration with test credentials."""
    return BillingClientConfig.from_urls(
        ["https://billing.example.test"],
        TEST_USER,
        TEST_PASSWORD,
        TEST_USER_AGENT,
    )


@pytest.fixture
def make_link():
    """Factory for link records with selected wire fields replaced."""
    return make_link_payload
