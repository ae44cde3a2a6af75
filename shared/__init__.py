"""
Shared infrastructure for the Paywire client.

This package contains cross-cutting concerns used by every module:
- config: Centralized settings management
- exceptions: Base exception classes

Note: Billing logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .exceptions import (
    PaywireError,
    ValidationError,
    ExternalServiceError,
)

__all__ = [
    "Settings",
    "get_settings",
    "PaywireError",
    "ValidationError",
    "ExternalServiceError",
]
