"""
HTTP transport to the billing proxy.

PushServiceTransport implements IBillingTransport over httpx. It signs every
request with the principal's credentials, validates the proxy's certificate
against the configured trust material and maps HTTP failures onto the
billing exception taxonomy. It never retries.
"""

import json
import logging
import random
import ssl
import threading
from typing import Any, Optional
from urllib.parse import quote

import httpx

from .config import BillingClientConfig, ServiceUrl
from .exceptions import (
    AuthorizationFailedError,
    NotFoundError,
    RateLimitExceededError,
    RequestRejectedError,
    TransportFailureError,
)
from .models import ChargeRequest, SubscriptionRequest

logger = logging.getLogger(__name__)


CONNECT_ACCOUNT_PATH = "/v1/billing/connect/{code}"
REVOKE_ACCESS_PATH = "/v1/billing/access/{user_id}"
PLANS_PATH = "/v1/billing/plans/{seller}"
PRODUCTS_PATH = "/v1/billing/products/{seller}"
PAYMENTS_PATH = "/v1/billing/payments/{contact}"
CHARGE_PATH = "/v1/billing/charge"
CUSTOMER_IDS_PATH = "/v1/billing/customers"
SUBSCRIPTION_PATH = "/v1/billing/subscription"

# Longest backend diagnostic carried on a RequestRejectedError
MAX_BACKEND_MESSAGE_LENGTH = 512


def _segment(value: str) -> str:
    """Quote a value for use as a single path segment."""
    return quote(value, safe="")


def _ssl_context(trust_store: str) -> ssl.SSLContext:
    """Build an SSL context trusting only the given CA material."""
    if "-----BEGIN" in trust_store:
        return ssl.create_default_context(cadata=trust_store)
    return ssl.create_default_context(cafile=trust_store)


def _backend_message(response: httpx.Response) -> Optional[str]:
    """Extract the diagnostic text the proxy attached to a failed response."""
    text = response.text.strip()
    if not text:
        return None
    try:
        body = json.loads(text)
    except ValueError:
        return text[:MAX_BACKEND_MESSAGE_LENGTH]
    if isinstance(body, dict):
        for key in ("message", "error_description", "error"):
            if isinstance(body.get(key), str):
                return body[key][:MAX_BACKEND_MESSAGE_LENGTH]
    return text[:MAX_BACKEND_MESSAGE_LENGTH]


def _raise_for_status(response: httpx.Response, operation: str) -> None:
    """Raise the billing exception matching a non-success response."""
    status = response.status_code
    if 200 <= status < 300:
        return

    if 400 <= status < 500:
        backend_message = _backend_message(response)
        if status in (401, 403):
            error_class = AuthorizationFailedError
        elif status == 404:
            error_class = NotFoundError
        elif status in (413, 429):
            error_class = RateLimitExceededError
        else:
            error_class = RequestRejectedError
        logger.warning(f"Billing proxy rejected {operation}: HTTP {status}")
        raise error_class(
            f"Billing proxy rejected {operation} (HTTP {status})",
            status_code=status,
            backend_message=backend_message,
        )

    cause = httpx.HTTPStatusError(
        f"Unexpected status {status} for {operation}",
        request=response.request,
        response=response,
    )
    logger.warning(f"Billing proxy failed {operation}: HTTP {status}")
    raise TransportFailureError(
        f"Billing proxy returned HTTP {status} for {operation}",
        cause=cause,
    ) from cause


class PushServiceTransport:
    """
    httpx-backed transport to the billing proxy.

    One httpx.Client is kept per configured URL and created on first use, so
    construction performs no I/O. httpx clients are safe to share between
    threads; the only lock guards their lazy creation.
    """

    def __init__(
        self,
        config: BillingClientConfig,
        http_transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the transport.

        Args:
            config: Endpoint, credential and timeout configuration
            http_transport: Optional httpx transport (e.g., httpx.MockTransport
                            in tests). When set, trust material is not loaded.
        """
        self._config = config
        self._http_transport = http_transport
        self._auth = httpx.BasicAuth(config.user, config.password.get_secret_value())
        self._clients: dict[str, httpx.Client] = {}
        self._lock = threading.Lock()

    @property
    def config(self) -> BillingClientConfig:
        return self._config

    def _client_for(self, service_url: ServiceUrl) -> httpx.Client:
        with self._lock:
            client = self._clients.get(service_url.url)
            if client is None:
                headers = {"User-Agent": self._config.user_agent}
                if service_url.host_header:
                    headers["Host"] = service_url.host_header

                kwargs: dict[str, Any] = {
                    "base_url": service_url.url,
                    "auth": self._auth,
                    "headers": headers,
                    "timeout": self._config.timeout,
                }
                if self._http_transport is not None:
                    kwargs["transport"] = self._http_transport
                elif service_url.trust_store:
                    kwargs["verify"] = _ssl_context(service_url.trust_store)

                client = httpx.Client(**kwargs)
                self._clients[service_url.url] = client
            return client

    def _request(
        self,
        method: str,
        path: str,
        operation: str,
        body: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        service_url = random.choice(self._config.urls)
        logger.debug(f"Billing request {operation}: {method} via {service_url.url}")

        try:
            client = self._client_for(service_url)
            response = client.request(method, path, json=body)
        except httpx.HTTPError as e:
            logger.warning(f"Billing transport failure during {operation}: {type(e).__name__}")
            raise TransportFailureError(
                f"Could not reach billing proxy for {operation}: {e}",
                cause=e,
            ) from e
        except (ssl.SSLError, OSError) as e:
            # Unreadable or invalid trust material
            logger.warning(f"Billing TLS setup failed during {operation}: {e}")
            raise TransportFailureError(
                f"TLS setup failed for {operation}: {e}",
                cause=e,
            ) from e

        _raise_for_status(response, operation)
        return response

    def _json_object(self, response: httpx.Response, operation: str) -> dict[str, Any]:
        if not response.content.strip():
            return {}
        try:
            body = response.json()
        except ValueError as e:
            raise TransportFailureError(
                f"Malformed response body for {operation}",
                cause=e,
            ) from e
        if not isinstance(body, dict):
            cause = TypeError(f"Expected a JSON object, got {type(body).__name__}")
            raise TransportFailureError(
                f"Malformed response body for {operation}",
                cause=cause,
            ) from cause
        return body

    def exchange_authorization_code(self, code: str) -> dict[str, Any]:
        operation = "connect_account"
        response = self._request(
            "PUT",
            CONNECT_ACCOUNT_PATH.format(code=_segment(code)),
            operation,
        )
        body = self._json_object(response, operation)
        if not body:
            cause = ValueError("Empty link record")
            raise TransportFailureError(
                f"Malformed response body for {operation}",
                cause=cause,
            ) from cause
        return body

    def revoke(self, user_id: str) -> None:
        self._request(
            "DELETE",
            REVOKE_ACCESS_PATH.format(user_id=_segment(user_id)),
            "revoke_billing_access",
        )

    def list_plans(self, seller_number: str) -> dict[str, Any]:
        operation = "get_plans"
        response = self._request(
            "GET",
            PLANS_PATH.format(seller=_segment(seller_number)),
            operation,
        )
        return self._json_object(response, operation)

    def list_products(self, seller_number: str) -> dict[str, Any]:
        operation = "get_products"
        response = self._request(
            "GET",
            PRODUCTS_PATH.format(seller=_segment(seller_number)),
            operation,
        )
        return self._json_object(response, operation)

    def fetch_payment_history(self, contact_number: str) -> str:
        response = self._request(
            "GET",
            PAYMENTS_PATH.format(contact=_segment(contact_number)),
            "get_payments",
        )
        return response.text

    def submit_charge(
        self,
        product_id: str,
        sku_id: str,
        source_token_id: str,
        seller_number: str,
        product_name: Optional[str] = None,
    ) -> str:
        request = ChargeRequest(
            product_id=product_id,
            sku_id=sku_id,
            source_token_id=source_token_id,
            seller_number=seller_number,
            product_name=product_name,
        )
        response = self._request("POST", CHARGE_PATH, "perform_charge", body=request.to_wire())
        return response.text

    def list_customer_ids(self) -> dict[str, str]:
        operation = "get_customer_ids"
        response = self._request("GET", CUSTOMER_IDS_PATH, operation)
        return self._json_object(response, operation)

    def submit_subscription(
        self,
        plan_id: str,
        source_token_id: Optional[str],
        seller_number: str,
        plan_name: str,
    ) -> str:
        request = SubscriptionRequest(
            plan_id=plan_id,
            source_token_id=source_token_id,
            seller_number=seller_number,
            plan_name=plan_name,
        )
        response = self._request(
            "POST",
            SUBSCRIPTION_PATH,
            "subscribe_to_plan",
            body=request.to_wire(),
        )
        return response.text

    def close(self) -> None:
        """Close every underlying HTTP client."""
        with self._lock:
            clients = list(self._clients.values())
            self._clients.clear()
        for client in clients:
            client.close()

    def __enter__(self) -> "PushServiceTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
