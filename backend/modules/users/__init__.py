"""
Users module.

Derives the canonical User from the identity provider's session and keeps
it current.

Public API:
- User, AccountType: canonical user model
- UserModelSynchronizer: session-to-user synchronization
- IFallbackIdentityResolver / DemoAccountResolver: injected demo lookups
- to_canonical_user: record mapping, shared with the API
"""

from .interfaces import IFallbackIdentityResolver, UserListener
from .mapping import merge_fallback, needs_onboarding, to_canonical_user
from .models import AccountType, User
from .resolvers import DemoAccountResolver
from .service import UserModelSynchronizer

__all__ = [
    "IFallbackIdentityResolver",
    "UserListener",
    "merge_fallback",
    "needs_onboarding",
    "to_canonical_user",
    "AccountType",
    "User",
    "DemoAccountResolver",
    "UserModelSynchronizer",
]
