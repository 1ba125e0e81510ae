"""
Profiles module interface.

The API depends on IProfileService, not on the Supabase implementation.
"""

from typing import Protocol, runtime_checkable

from modules.session.models import ProfileUpdate, ProviderUserRecord


@runtime_checkable
class IProfileService(Protocol):
    """
    Interface for server-side profile operations.

    This protocol defines the contract behind the profile-update endpoint.
    """

    async def update_profile(self, user_id: str, fields: ProfileUpdate) -> ProviderUserRecord:
        """
        Apply a partial profile update for an authenticated user.

        Args:
            user_id: Provider user ID from the verified access token
            fields: Fields to change

        Returns:
            The updated provider record

        Raises:
            UnauthorizedError: If the user no longer exists
            AccountTypeLockedError: If an onboarded account would switch role
            ExternalServiceError: If the identity provider fails
        """
        ...
