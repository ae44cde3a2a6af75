"""
Billing module.

Routes billing operations (account linking, catalog queries, charges,
subscriptions) through the billing proxy instead of the payment processor.

Public API:
- BillingClient: Facade for billing operations
- IBillingClient / IBillingTransport: Interfaces for the facade and its transport
- BillingClientConfig / ServiceUrl: Immutable client configuration
- LinkedAccountInfo: Credentials of a linked merchant account
- Billing exceptions: InvalidArgumentError, RequestRejectedError, TransportFailureError
"""

from .interfaces import IBillingClient, IBillingTransport
from .config import BillingClientConfig, ServiceUrl
from .models import (
    LinkedAccountInfo,
    Plan,
    PlanCollection,
    Product,
    ProductCollection,
    ProtocolVersion,
    RawDocument,
)
from .exceptions import (
    BillingError,
    InvalidArgumentError,
    UnsupportedOperationError,
    RequestRejectedError,
    AuthorizationFailedError,
    NotFoundError,
    RateLimitExceededError,
    TransportFailureError,
)
from .transport import PushServiceTransport
from .client import BillingClient, get_billing_client, reset_billing_client

__all__ = [
    # Interfaces
    "IBillingClient",
    "IBillingTransport",
    # Client
    "BillingClient",
    "PushServiceTransport",
    "get_billing_client",
    "reset_billing_client",
    # Configuration
    "BillingClientConfig",
    "ServiceUrl",
    # Models
    "LinkedAccountInfo",
    "Plan",
    "PlanCollection",
    "Product",
    "ProductCollection",
    "ProtocolVersion",
    "RawDocument",
    # Exceptions
    "BillingError",
    "InvalidArgumentError",
    "UnsupportedOperationError",
    "RequestRejectedError",
    "AuthorizationFailedError",
    "NotFoundError",
    "RateLimitExceededError",
    "TransportFailureError",
]
