"""
Billing client implementation.

BillingClient validates arguments, makes exactly one transport call per
operation and turns the raw response into a typed result. It keeps no state
besides what it was constructed with.
"""

import logging
from typing import Any, Optional, Sequence, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings, get_settings

from .config import BillingClientConfig, ServiceUrl
from .exceptions import (
    InvalidArgumentError,
    TransportFailureError,
    UnsupportedOperationError,
)
from .interfaces import IBillingClient, IBillingTransport
from .models import (
    LinkedAccountInfo,
    PlanCollection,
    ProductCollection,
    ProtocolVersion,
    RawDocument,
)
from .transport import PushServiceTransport

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_CUSTOMER_IDS = TypeAdapter(dict[str, str])


def _require(parameter: str, value: Any) -> str:
    """Return value if it is a non-blank string, else fail fast."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(parameter)
    return value


def _decode(model: Type[ModelT], payload: Any, operation: str) -> ModelT:
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise TransportFailureError(
            f"Malformed response body for {operation}",
            cause=e,
        ) from e


class BillingClient(IBillingClient):
    """
    Facade over the billing proxy.

    Two protocol versions exist in the field. RECURRING backends offer every
    operation; BASIC backends have no plans or subscriptions and take no
    product name on charges. Calls outside the configured version fail with
    UnsupportedOperationError before anything is sent.
    """

    def __init__(
        self,
        transport: IBillingTransport,
        protocol_version: ProtocolVersion = ProtocolVersion.RECURRING,
    ):
        self._transport = transport
        self._protocol_version = ProtocolVersion(protocol_version)

    @classmethod
    def from_config(
        cls,
        config: BillingClientConfig,
        http_transport: Optional[httpx.BaseTransport] = None,
    ) -> "BillingClient":
        """Build a client with an HTTP transport for the given configuration."""
        return cls(
            PushServiceTransport(config, http_transport=http_transport),
            protocol_version=config.protocol_version,
        )

    @classmethod
    def create(
        cls,
        urls: Sequence[Union[str, ServiceUrl]],
        user: str,
        password: str,
        user_agent: str,
        protocol_version: ProtocolVersion = ProtocolVersion.RECURRING,
    ) -> "BillingClient":
        """
        Construct a client over one or more candidate proxy URLs.

        Args:
            urls: Candidate base URLs of the billing proxy
            user: Principal (e.g., phone number)
            password: Shared secret for the proxy
            user_agent: String identifying the client software
            protocol_version: Capability level of the backend
        """
        config = BillingClientConfig.from_urls(
            urls, user, password, user_agent, protocol_version=protocol_version
        )
        return cls.from_config(config)

    @classmethod
    def create_pinned(
        cls,
        url: str,
        trust_store: str,
        user: str,
        password: str,
        user_agent: str,
        protocol_version: ProtocolVersion = ProtocolVersion.RECURRING,
    ) -> "BillingClient":
        """
        Construct a client for a single URL validated against explicit trust material.

        Args:
            url: Base URL of the billing proxy
            trust_store: CA bundle path or inline PEM
            user: Principal (e.g., phone number)
            password: Shared secret for the proxy
            user_agent: String identifying the client software
            protocol_version: Capability level of the backend
        """
        config = BillingClientConfig.pinned(
            url, trust_store, user, password, user_agent, protocol_version=protocol_version
        )
        return cls.from_config(config)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "BillingClient":
        """
        Construct a client from environment settings.

        A configured trust store pins the first service URL; otherwise all
        service URLs are candidates.
        """
        settings = settings or get_settings()
        protocol_version = ProtocolVersion(settings.protocol_version)
        if not settings.service_urls:
            raise ValueError(
                "Billing proxy configuration missing. Set BILLING_SERVICE_URLS."
            )

        if settings.trust_store:
            config = BillingClientConfig.pinned(
                settings.service_urls[0],
                settings.trust_store,
                settings.user,
                settings.password,
                settings.user_agent,
                protocol_version=protocol_version,
                timeout=settings.request_timeout,
            )
        else:
            config = BillingClientConfig.from_urls(
                settings.service_urls,
                settings.user,
                settings.password,
                settings.user_agent,
                protocol_version=protocol_version,
                timeout=settings.request_timeout,
            )
        return cls.from_config(config)

    @property
    def protocol_version(self) -> ProtocolVersion:
        return self._protocol_version

    def _require_recurring(self, operation: str) -> None:
        if not self._protocol_version.supports_recurring:
            raise UnsupportedOperationError(operation, self._protocol_version.value)

    def connect_account(self, authorization_code: str) -> LinkedAccountInfo:
        """
        Link the account identified by an authorization code.

        The code comes from the processor's consent flow and can be used once;
        replaying it is rejected by the processor.

        Returns:
            Credentials for the linked account
        """
        _require("authorization_code", authorization_code)
        payload = self._transport.exchange_authorization_code(authorization_code)
        info = _decode(LinkedAccountInfo, payload, "connect_account")
        logger.info(f"Linked billing account {info.linked_account_id or info.id}")
        return info

    def revoke_billing_access(self, user_id: str) -> None:
        """Revoke the billing credentials linked for user_id."""
        _require("user_id", user_id)
        self._transport.revoke(user_id)
        logger.info("Revoked billing access")

    def get_plans(self, seller_number: str) -> PlanCollection:
        """Return the plans offered by the seller."""
        self._require_recurring("get_plans")
        _require("seller_number", seller_number)
        payload = self._transport.list_plans(seller_number)
        return _decode(PlanCollection, payload, "get_plans")

    def get_products(self, seller_number: str) -> ProductCollection:
        """Return the products offered by the seller."""
        _require("seller_number", seller_number)
        payload = self._transport.list_products(seller_number)
        return _decode(ProductCollection, payload, "get_products")

    def get_payments(self, contact_number: str) -> RawDocument:
        """Return the contact's charge history as an opaque JSON document."""
        _require("contact_number", contact_number)
        return RawDocument(self._transport.fetch_payment_history(contact_number))

    def perform_charge(
        self,
        product_id: str,
        sku_id: str,
        source_token_id: str,
        seller_number: str,
        product_name: Optional[str] = None,
    ) -> RawDocument:
        """
        Charge a payment source for a product, proxied through the backend.

        Args:
            product_id: ID of the product being purchased
            sku_id: ID of the product's SKU
            source_token_id: Token for the card or other payment source
            seller_number: Seller of the product
            product_name: Display name (RECURRING protocol only)

        Returns:
            The processor's charge record as an opaque JSON document
        """
        _require("product_id", product_id)
        _require("sku_id", sku_id)
        _require("source_token_id", source_token_id)
        _require("seller_number", seller_number)

        if product_name is None:
            return RawDocument(
                self._transport.submit_charge(product_id, sku_id, source_token_id, seller_number)
            )

        self._require_recurring("product_name")
        _require("product_name", product_name)
        return RawDocument(
            self._transport.submit_charge(
                product_id, sku_id, source_token_id, seller_number, product_name
            )
        )

    def get_customer_ids(self) -> dict[str, str]:
        """Return processor name -> customer ID for the authenticated principal."""
        payload = self._transport.list_customer_ids()
        try:
            return _CUSTOMER_IDS.validate_python(payload or {})
        except PydanticValidationError as e:
            raise TransportFailureError(
                "Malformed response body for get_customer_ids",
                cause=e,
            ) from e

    def subscribe_to_plan(
        self,
        plan_id: str,
        source_token_id: Optional[str],
        seller_number: str,
        plan_name: str,
    ) -> RawDocument:
        """
        Subscribe the principal to a plan.

        An empty or missing source_token_id charges the payment method already
        stored for the principal.

        Returns:
            The processor's subscription record as an opaque JSON document
        """
        self._require_recurring("subscribe_to_plan")
        _require("plan_id", plan_id)
        _require("seller_number", seller_number)
        _require("plan_name", plan_name)

        if source_token_id is None or source_token_id == "":
            token = None
        else:
            token = _require("source_token_id", source_token_id)

        return RawDocument(
            self._transport.submit_subscription(plan_id, token, seller_number, plan_name)
        )

    def close(self) -> None:
        """Release the transport's connections, if it holds any."""
        close = getattr(self._transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "BillingClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


# Module-level instance getter
_client_instance: Optional[BillingClient] = None


def get_billing_client() -> BillingClient:
    """Get the billing client singleton, built from settings."""
    global _client_instance
    if _client_instance is None:
        _client_instance = BillingClient.from_settings()
    return _client_instance


def reset_billing_client() -> None:
    """Reset the billing client singleton (for testing)."""
    global _client_instance
    if _client_instance is not None:
        _client_instance.close()
    _client_instance = None
