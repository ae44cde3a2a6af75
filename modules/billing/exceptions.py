"""
Billing module exceptions.

Every billing failure surfaces as one of three kinds:
- InvalidArgumentError: rejected locally, before any request is sent
- RequestRejectedError: the proxy or the payment processor declined the request
- TransportFailureError: the request could not be completed (network, TLS,
  server error, malformed response)
"""

from typing import Optional

from shared.exceptions import PaywireError, ValidationError, ExternalServiceError


BILLING_SERVICE = "billing-proxy"


class BillingError(PaywireError):
    """Base exception for billing-related errors."""

    pass


class InvalidArgumentError(ValidationError):
    """Raised when a required parameter is empty or malformed."""

    def __init__(self, parameter: str, reason: str = "must be a non-empty string"):
        super().__init__(
            f"Invalid argument '{parameter}': {reason}",
            code="INVALID_ARGUMENT",
            details={"parameter": parameter, "reason": reason},
        )
        self.parameter = parameter


class UnsupportedOperationError(InvalidArgumentError):
    """
    Raised when the configured protocol version does not offer an operation.

    Basic backends have no plans or subscriptions and do not accept a
    product name on charges.
    """

    def __init__(self, operation: str, protocol_version: str):
        super().__init__(
            operation,
            f"not supported by protocol version '{protocol_version}'",
        )
        self.code = "UNSUPPORTED_OPERATION"
        self.details["protocol_version"] = protocol_version


class RequestRejectedError(BillingError):
    """
    Raised when the proxy or payment processor declines a request.

    Carries the HTTP status and whatever diagnostic text the backend returned.
    """

    default_code = "REQUEST_REJECTED"

    def __init__(
        self,
        message: str,
        status_code: int,
        backend_message: Optional[str] = None,
    ):
        details = {"status_code": status_code}
        if backend_message:
            details["backend_message"] = backend_message
        super().__init__(message, code=self.default_code, details=details)
        self.status_code = status_code
        self.backend_message = backend_message


class AuthorizationFailedError(RequestRejectedError):
    """Raised when the proxy refuses the principal or shared secret (401/403)."""

    default_code = "AUTHORIZATION_FAILED"


class NotFoundError(RequestRejectedError):
    """Raised when the referenced seller, user, or plan does not exist (404)."""

    default_code = "NOT_FOUND"


class RateLimitExceededError(RequestRejectedError):
    """Raised when the proxy throttles the principal (413/429)."""

    default_code = "RATE_LIMIT_EXCEEDED"


class TransportFailureError(BillingError, ExternalServiceError):
    """
    Raised when a request could not be completed.

    Always wraps the underlying cause, which is also chained as __cause__.
    """

    def __init__(self, message: str, cause: BaseException):
        super().__init__(
            message,
            service=BILLING_SERVICE,
            code="TRANSPORT_FAILURE",
            details={"cause": type(cause).__name__},
        )
        self.cause = cause
        self.__cause__ = cause
