"""
Session module.

Wraps the external identity provider and exposes the current session as an
observable value plus the sign-in, sign-up, sign-out and profile-update
operations.

Public API:
- ISessionAdapter / SessionAdapter: session operations and notifications
- IIdentityProvider: boundary to the identity service
- Session, ProviderUserRecord, ProfileUpdate, AccountType: models
- Session exceptions: InvalidCredentialsError, EmailTakenError, etc.
"""

from .interfaces import IIdentityProvider, ISessionAdapter, SessionListener
from .models import AccountType, ProfileUpdate, ProviderUserRecord, Session
from .service import SessionAdapter
from .exceptions import (
    InvalidCredentialsError,
    EmailTakenError,
    UnauthorizedError,
    ConfirmationRequiredError,
    NetworkError,
    UnsupportedProviderError,
    OperationInProgressError,
)

__all__ = [
    # Interfaces
    "IIdentityProvider",
    "ISessionAdapter",
    "SessionListener",
    # Implementation
    "SessionAdapter",
    # Models
    "AccountType",
    "ProfileUpdate",
    "ProviderUserRecord",
    "Session",
    # Exceptions
    "InvalidCredentialsError",
    "EmailTakenError",
    "UnauthorizedError",
    "ConfirmationRequiredError",
    "NetworkError",
    "UnsupportedProviderError",
    "OperationInProgressError",
]
