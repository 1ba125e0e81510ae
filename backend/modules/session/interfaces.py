"""
Session module interfaces.

IIdentityProvider is the boundary to the external identity service;
ISessionAdapter is what the rest of the storefront depends on.
"""

from typing import Any, Callable, Optional, Protocol, runtime_checkable

from .models import AccountType, ProfileUpdate, ProviderUserRecord, Session

SessionListener = Callable[[Optional[Session]], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class IIdentityProvider(Protocol):
    """
    Interface to an external identity service.

    Implementations translate their own failures into the session
    module exceptions (InvalidCredentialsError, EmailTakenError,
    UnauthorizedError, NetworkError).
    """

    async def get_session(self) -> Optional[Session]:
        """Return the provider's persisted session, if any."""
        ...

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        """Authenticate with email and password."""
        ...

    async def sign_in_with_oauth(self, provider: str, redirect_to: Optional[str]) -> str:
        """
        Start a redirect-based federated sign-in.

        Returns:
            URL the user agent must be sent to
        """
        ...

    async def exchange_code_for_session(self, auth_code: str) -> Session:
        """Finish a federated sign-in with the code from the redirect."""
        ...

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any],
    ) -> Optional[Session]:
        """
        Create an account.

        Returns:
            The new session, or None when email confirmation is pending
        """
        ...

    async def sign_out(self) -> None:
        """Revoke the current session remotely."""
        ...

    async def update_user(self, metadata: dict[str, Any]) -> ProviderUserRecord:
        """Merge metadata into the signed-in user's record."""
        ...

    def watch(self, listener: SessionListener) -> None:
        """Register for provider-originated session changes."""
        ...


@runtime_checkable
class ISessionAdapter(Protocol):
    """
    Interface for session operations.

    The current session is observable through subscribe(); every
    operation raises a typed StorefrontError subclass on failure.
    """

    def current_session(self) -> Optional[Session]:
        """Latest known session, or None."""
        ...

    def subscribe(self, listener: SessionListener) -> Unsubscribe:
        """Register a listener for session changes, in emission order."""
        ...

    def is_in_flight(self, operation: str) -> bool:
        """Whether the named operation is currently running."""
        ...

    async def restore(self) -> Optional[Session]:
        """Load a persisted provider session."""
        ...

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: If the provider rejects the pair
            NetworkError: On transport failure
        """
        ...

    async def sign_in_with_provider(self, provider_name: str) -> str:
        """
        Start a federated sign-in.

        Returns:
            Redirect URL. The session arrives later, through subscribe().
        """
        ...

    async def complete_provider_sign_in(self, auth_code: str) -> Session:
        """Exchange the federated callback code for a session."""
        ...

    async def sign_up(
        self,
        email: str,
        password: str,
        name: str,
        account_type: AccountType,
        company: Optional[str] = None,
    ) -> Session:
        """
        Create an account. New accounts always need onboarding.

        Raises:
            EmailTakenError: If the email already has an account
            NetworkError: On transport failure
        """
        ...

    async def sign_out(self) -> None:
        """Sign out. Local session state is cleared even if the remote call fails."""
        ...

    async def update_profile(self, fields: ProfileUpdate) -> ProviderUserRecord:
        """
        Apply a partial profile update to the signed-in user.

        Raises:
            UnauthorizedError: If there is no active session
            AccountTypeLockedError: If an onboarded account would switch role
        """
        ...
