"""Tests for billing module exceptions."""

import pytest

from shared.exceptions import ExternalServiceError, PaywireError, ValidationError
from modules.billing.exceptions import (
    BillingError,
    InvalidArgumentError,
    UnsupportedOperationError,
    RequestRejectedError,
    AuthorizationFailedError,
    NotFoundError,
    RateLimitExceededError,
    TransportFailureError,
)


class TestBillingError:
    def test_billing_error(self):
        """Should create a base billing error."""
        error = BillingError("Something went wrong", code="BILLING_ERROR")
        assert str(error) == "Something went wrong"
        assert error.code == "BILLING_ERROR"
        assert isinstance(error, PaywireError)


class TestInvalidArgumentError:
    def test_invalid_argument(self):
        """Should name the offending parameter."""
        error = InvalidArgumentError("sku_id")
        assert "sku_id" in str(error)
        assert error.code == "INVALID_ARGUMENT"
        assert error.parameter == "sku_id"
        assert error.details["parameter"] == "sku_id"
        assert isinstance(error, ValidationError)

    def test_unsupported_operation(self):
        """Should record the protocol version."""
        error = UnsupportedOperationError("get_plans", "basic")
        assert error.code == "UNSUPPORTED_OPERATION"
        assert error.details["protocol_version"] == "basic"
        assert error.parameter == "get_plans"


class TestRequestRejectedError:
    def test_request_rejected(self):
        """Should carry status and backend message."""
        error = RequestRejectedError("Rejected", status_code=400, backend_message="Invalid token")
        assert error.code == "REQUEST_REJECTED"
        assert error.status_code == 400
        assert error.details == {"status_code": 400, "backend_message": "Invalid token"}

    def test_without_backend_message(self):
        """Should omit the backend message when there is none."""
        error = RequestRejectedError("Rejected", status_code=409)
        assert "backend_message" not in error.details

    @pytest.mark.parametrize(
        "error_class, code",
        [
            (AuthorizationFailedError, "AUTHORIZATION_FAILED"),
            (NotFoundError, "NOT_FOUND"),
            (RateLimitExceededError, "RATE_LIMIT_EXCEEDED"),
        ],
    )
    def test_subclasses(self, error_class, code):
        """Specific rejections keep the rejected kind."""
        error = error_class("Rejected", status_code=403)
        assert error.code == code
        assert isinstance(error, RequestRejectedError)


class TestTransportFailureError:
    def test_wraps_cause(self):
        """Should keep and chain the underlying cause."""
        cause = ConnectionResetError("reset by peer")
        error = TransportFailureError("Could not reach billing proxy", cause=cause)
        assert error.cause is cause
        assert error.__cause__ is cause
        assert error.code == "TRANSPORT_FAILURE"
        assert error.details["cause"] == "ConnectionResetError"

    def test_is_external_service_error(self):
        """Should identify the billing proxy as the failing service."""
        error = TransportFailureError("Timed out", cause=TimeoutError())
        assert isinstance(error, ExternalServiceError)
        assert isinstance(error, BillingError)
        assert error.service == "billing-proxy"

    def test_to_dict(self):
        """Should convert to dict for logging or forwarding."""
        result = TransportFailureError("Timed out", cause=TimeoutError()).to_dict()
        assert result["error"] == "TRANSPORT_FAILURE"
        assert result["message"] == "Timed out"
        assert result["details"]["service"] == "billing-proxy"
