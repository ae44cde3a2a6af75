"""
Base exception classes for the Paywire client.

Each module should define its own exceptions that inherit from these bases.
This lets callers catch every client failure with a single except clause.
"""

from typing import Optional, Any


class PaywireError(Exception):
    """
    Base exception for all Paywire errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logging or forwarding."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(PaywireError):
    """Input validation failed."""

    pass


class ExternalServiceError(PaywireError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
