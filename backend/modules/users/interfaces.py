"""
User module interfaces.

The fallback identity resolver is injected into the synchronizer so demo
lookups never get hardcoded into the mapping itself.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from modules.session.models import ProviderUserRecord

from .models import User

UserListener = Callable[[Optional[User]], None]


@runtime_checkable
class IFallbackIdentityResolver(Protocol):
    """Supplies profile data for accounts the provider knows little about."""

    def resolve(self, email: str) -> Optional[ProviderUserRecord]:
        """
        Look up a fallback record.

        Args:
            email: Account email from the provider record

        Returns:
            ProviderUserRecord if known, None otherwise
        """
        ...
