"""
Centralized configuration for the Paywire client.

All settings are loaded from environment variables prefixed with BILLING_
(e.g., BILLING_SERVICE_URLS, BILLING_USER) or from a local .env file.
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BILLING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Billing proxy endpoints. More than one URL enables per-request selection.
    service_urls: list[str] = []

    # CA bundle path or inline PEM used to pin a single service URL
    trust_store: str = ""

    # Principal and shared secret for the proxy
    user: str = ""
    password: str = ""

    user_agent: str = "paywire-client/0.1.0"
    request_timeout: float = 30.0  # seconds

    # "basic" backends lack plans and subscriptions
    protocol_version: Literal["basic", "recurring"] = "recurring"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
