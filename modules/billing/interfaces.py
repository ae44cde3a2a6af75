"""
Billing module interfaces.

IBillingTransport is the capability set the client needs from whatever
carries requests to the billing proxy. Authentication, TLS validation and
retries live behind it. IBillingClient is the facade other code depends on.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import (
    LinkedAccountInfo,
    PlanCollection,
    ProductCollection,
    RawDocument,
)


@runtime_checkable
class IBillingTransport(Protocol):
    """
    Transport to the billing proxy.

    Implementations raise RequestRejectedError when the proxy declines a
    request and TransportFailureError for anything else that goes wrong.
    """

    def exchange_authorization_code(self, code: str) -> dict[str, Any]:
        """
        Exchange an authorization code for a linked-account record.

        The proxy persists the resulting credentials for the principal.

        Returns:
            The decoded link record, using wire field names
        """
        ...

    def revoke(self, user_id: str) -> None:
        """Invalidate the billing credentials linked for user_id."""
        ...

    def list_plans(self, seller_number: str) -> dict[str, Any]:
        """Return the seller's plan list envelope as decoded JSON."""
        ...

    def list_products(self, seller_number: str) -> dict[str, Any]:
        """Return the seller's product list envelope as decoded JSON."""
        ...

    def fetch_payment_history(self, contact_number: str) -> str:
        """Return the contact's charge history as the raw response text."""
        ...

    def submit_charge(
        self,
        product_id: str,
        sku_id: str,
        source_token_id: str,
        seller_number: str,
        product_name: Optional[str] = None,
    ) -> str:
        """
        Execute a one-time charge.

        Args:
            product_id: Product being purchased
            sku_id: SKU of the product
            source_token_id: Payment source token
            seller_number: Seller of the product
            product_name: Display name; None leaves it off the request

        Returns:
            The processor's charge record as raw response text
        """
        ...

    def list_customer_ids(self) -> dict[str, str]:
        """Return processor name -> customer ID for the principal."""
        ...

    def submit_subscription(
        self,
        plan_id: str,
        source_token_id: Optional[str],
        seller_number: str,
        plan_name: str,
    ) -> str:
        """
        Subscribe the principal to a plan.

        Args:
            plan_id: Plan to subscribe to
            source_token_id: Payment source token, or None to charge the
                             payment method stored on file
            seller_number: Seller offering the plan
            plan_name: Display name of the plan

        Returns:
            The processor's subscription record as raw response text
        """
        ...


@runtime_checkable
class IBillingClient(Protocol):
    """
    Facade for billing operations.

    Every method performs exactly one request and never retries.

    Raises (all methods):
        InvalidArgumentError: A required argument is empty; nothing was sent
        RequestRejectedError: The proxy or processor declined the request
        TransportFailureError: The request could not be completed
    """

    def connect_account(self, authorization_code: str) -> LinkedAccountInfo:
        ...

    def revoke_billing_access(self, user_id: str) -> None:
        ...

    def get_plans(self, seller_number: str) -> PlanCollection:
        ...

    def get_products(self, seller_number: str) -> ProductCollection:
        ...

    def get_payments(self, contact_number: str) -> RawDocument:
        ...

    def perform_charge(
        self,
        product_id: str,
        sku_id: str,
        source_token_id: str,
        seller_number: str,
        product_name: Optional[str] = None,
    ) -> RawDocument:
        ...

    def get_customer_ids(self) -> dict[str, str]:
        ...

    def subscribe_to_plan(
        self,
        plan_id: str,
        source_token_id: Optional[str],
        seller_number: str,
        plan_name: str,
    ) -> RawDocument:
        ...
