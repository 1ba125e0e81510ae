"""
Session module exceptions.

Provider failures are translated into these so callers never see
identity-provider specific error types. Messages are passed through
verbatim for display next to the triggering form.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    StorefrontError,
    ValidationError,
)


class InvalidCredentialsError(AuthenticationError):
    """Raised when the provider rejects an email/password pair."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class EmailTakenError(ConflictError):
    """Raised when signing up with an email that already has an account."""

    def __init__(self, email: str, message: str = "An account with this email already exists"):
        super().__init__(message, code="EMAIL_TAKEN", details={"email": email})


class UnauthorizedError(AuthenticationError):
    """Raised when an operation needs an active session and there is none."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="UNAUTHORIZED")


class ConfirmationRequiredError(AuthenticationError):
    """Raised when sign-up succeeded but the email must be confirmed first."""

    def __init__(self, email: str):
        super().__init__(
            "Check your inbox to confirm your email address",
            code="CONFIRMATION_REQUIRED",
            details={"email": email},
        )


class NetworkError(ExternalServiceError):
    """Raised when the identity provider cannot be reached."""

    def __init__(self, message: str = "Could not reach the identity provider"):
        super().__init__(message, service="identity", code="NETWORK_ERROR")


class UnsupportedProviderError(ValidationError):
    """Raised for a social login provider that is not enabled."""

    def __init__(self, provider: str):
        super().__init__(
            f"Sign-in with {provider} is not available",
            code="UNSUPPORTED_PROVIDER",
            details={"provider": provider},
        )


class OperationInProgressError(StorefrontError):
    """Raised when the same operation is submitted again before it finished."""

    def __init__(self, operation: str):
        super().__init__(
            f"{operation} is already in progress",
            code="OPERATION_IN_PROGRESS",
            details={"operation": operation},
        )


class WeakPasswordError(ValidationError):
    """Raised when the identity provider rejects a password as too weak."""

    def __init__(self, message: str, reasons: Optional[list[str]] = None):
        super().__init__(
            message,
            code="WEAK_PASSWORD",
            details={"reasons": list(reasons or [])},
        )


class AccountTypeLockedError(ValidationError):
    """Raised when changing the account type after onboarding completed."""

    def __init__(self, current: str, requested: str):
        super().__init__(
            "The account type cannot be changed once onboarding is complete",
            code="ACCOUNT_TYPE_LOCKED",
            details={"current": current, "requested": requested},
        )
