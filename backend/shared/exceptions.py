"""
Base exception classes for the Majji storefront backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class StorefrontError(Exception):
    """
    Base exception for all storefront errors.

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
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(StorefrontError):
    """Input validation failed. Always resolved locally."""

    pass


class AuthenticationError(StorefrontError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(StorefrontError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConflictError(StorefrontError):
    """The request conflicts with existing state."""

    pass


class ExternalServiceError(StorefrontError):
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
