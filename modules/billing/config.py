"""
Billing client configuration.

One immutable configuration type covers both ways of reaching the proxy:
- from_urls(): several candidate URLs, one picked per request
- pinned(): a single URL validated against explicit trust material
"""

from typing import Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .models import ProtocolVersion


DEFAULT_TIMEOUT_SECONDS = 30.0


class ServiceUrl(BaseModel):
    """
    A billing proxy endpoint.

    Attributes:
        url: Base URL of the proxy (scheme and host, optional path prefix)
        trust_store: CA bundle path or inline PEM used to validate the
                     proxy's certificate. None uses the system trust store.
        host_header: Optional Host header override (for fronted deployments)
    """

    model_config = ConfigDict(frozen=True)

    url: str
    trust_store: Optional[str] = None
    host_header: Optional[str] = None

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"Service URL must be http(s): {value!r}")
        return value.rstrip("/")


class BillingClientConfig(BaseModel):
    """Construction-time settings for a billing client. Never mutated."""

    model_config = ConfigDict(frozen=True)

    urls: tuple[ServiceUrl, ...] = Field(..., min_length=1)
    user: str = Field(..., min_length=1, description="Principal (e.g., phone number)")
    password: SecretStr = Field(..., description="Shared secret for the proxy")
    user_agent: str = Field(..., min_length=1, description="Sent on every request")
    protocol_version: ProtocolVersion = ProtocolVersion.RECURRING
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)

    @classmethod
    def from_urls(
        cls,
        urls: Sequence[Union[str, ServiceUrl]],
        user: str,
        password: str,
        user_agent: str,
        protocol_version: ProtocolVersion = ProtocolVersion.RECURRING,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> "BillingClientConfig":
        """
        Build a configuration over one or more candidate proxy URLs.

        Args:
            urls: Candidate base URLs; plain strings use the system trust store
            user: Principal identifier
            password: Shared secret
            user_agent: Client-identifying string
            protocol_version: Capability level of the backend
            timeout: Per-request timeout in seconds

        Returns:
            An immutable BillingClientConfig
        """
        service_urls = tuple(
            url if isinstance(url, ServiceUrl) else ServiceUrl(url=url) for url in urls
        )
        return cls(
            urls=service_urls,
            user=user,
            password=password,
            user_agent=user_agent,
            protocol_version=protocol_version,
            timeout=timeout,
        )

    @classmethod
    def pinned(
        cls,
        url: str,
        trust_store: str,
        user: str,
        password: str,
        user_agent: str,
        protocol_version: ProtocolVersion = ProtocolVersion.RECURRING,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> "BillingClientConfig":
        """
        Build a configuration for a single URL with explicit trust material.

        Args:
            url: Base URL of the proxy
            trust_store: CA bundle path or inline PEM for certificate validation
            user: Principal identifier
            password: Shared secret
            user_agent: Client-identifying string
            protocol_version: Capability level of the backend
            timeout: Per-request timeout in seconds
        """
        if not trust_store:
            raise ValueError("Pinned configuration requires trust material")
        return cls(
            urls=(ServiceUrl(url=url, trust_store=trust_store),),
            user=user,
            password=password,
            user_agent=user_agent,
            protocol_version=protocol_version,
            timeout=timeout,
        )
