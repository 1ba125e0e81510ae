"""
Supabase Auth identity provider.

Talks to Supabase Auth through supabase-py and translates its errors into
the session module exceptions.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import httpx
from supabase import Client
from supabase_auth.errors import (
    AuthApiError,
    AuthError,
    AuthInvalidCredentialsError,
    AuthRetryableError,
    AuthSessionMissingError,
    AuthUnknownError,
    AuthWeakPasswordError,
)

from shared.exceptions import ExternalServiceError, StorefrontError

from .interfaces import IIdentityProvider, SessionListener
from .models import ProviderUserRecord, Session
from .exceptions import (
    EmailTakenError,
    InvalidCredentialsError,
    NetworkError,
    UnauthorizedError,
    WeakPasswordError,
)

logger = logging.getLogger(__name__)

# Supabase Auth error codes
EMAIL_TAKEN_CODES = frozenset({"user_already_exists", "email_exists"})
INVALID_CREDENTIALS_CODES = frozenset({"invalid_credentials"})
WEAK_PASSWORD_CODES = frozenset({"weak_password"})
UNAUTHORIZED_CODES = frozenset(
    {
        "session_not_found",
        "session_expired",
        "bad_jwt",
        "no_authorization",
        "bad_code_verifier",
        "user_not_found",
    }
)


def record_from_supabase_user(user: Any) -> ProviderUserRecord:
    """Map a supabase-py User object to a provider record."""
    return ProviderUserRecord.from_metadata(
        id=user.id,
        email=user.email or "",
        metadata=user.user_metadata,
        email_verified=user.email_confirmed_at is not None,
        created_at=user.created_at,
    )


def session_from_supabase(session: Any) -> Session:
    """Map a supabase-py Session object to a storefront session."""
    return Session(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=session.expires_at,
        user=record_from_supabase_user(session.user),
    )


def translate_auth_error(operation: str, error: AuthApiError, email: str = "") -> StorefrontError:
    """
    Map a Supabase Auth API error onto the storefront error taxonomy.

    The provider's message is kept so it can be shown to the user as-is.
    """
    code = getattr(error, "code", None)
    status = getattr(error, "status", None)

    if code in EMAIL_TAKEN_CODES:
        return EmailTakenError(email=email, message=error.message)
    if code in WEAK_PASSWORD_CODES:
        return WeakPasswordError(error.message)
    if code in INVALID_CREDENTIALS_CODES or (
        operation == "sign_in_with_password" and status == 400
    ):
        return InvalidCredentialsError(error.message)
    if code in UNAUTHORIZED_CODES or status in (401, 403):
        return UnauthorizedError(error.message)
    if status is not None and status >= 500:
        return NetworkError(error.message)
    return ExternalServiceError(error.message, service="supabase", code=code)


@contextmanager
def translate_supabase_errors(operation: str, email: str = "") -> Iterator[None]:
    """
    Re-raise supabase-py and transport errors as storefront errors.

    Every supabase-auth error ends up in the storefront taxonomy; the
    final AuthError branch catches subclasses not listed here.
    """
    try:
        yield
    except AuthSessionMissingError as e:
        raise UnauthorizedError(e.message) from e
    except AuthRetryableError as e:
        raise NetworkError(e.message) from e
    except AuthWeakPasswordError as e:
        raise WeakPasswordError(e.message, getattr(e, "reasons", None)) from e
    except AuthInvalidCredentialsError as e:
        raise InvalidCredentialsError(e.message) from e
    except AuthApiError as e:
        raise translate_auth_error(operation, e, email) from e
    except AuthUnknownError as e:
        raise NetworkError(e.message) from e
    except AuthError as e:
        raise ExternalServiceError(
            e.message, service="supabase", code=getattr(e, "code", None)
        ) from e
    except httpx.TransportError as e:
        raise NetworkError(str(e)) from e


class SupabaseIdentityProvider(IIdentityProvider):
    """
    Identity provider backed by Supabase Auth.

    The supabase-py client keeps the signed-in session itself, so this
    class is stateless apart from the client it wraps.
    """

    def __init__(self, client: Client):
        self._client = client

    async def get_session(self) -> Optional[Session]:
        with translate_supabase_errors("get_session"):
            session = self._client.auth.get_session()
        return session_from_supabase(session) if session else None

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        with translate_supabase_errors("sign_in_with_password"):
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        if response.session is None:
            raise InvalidCredentialsError()
        return session_from_supabase(response.session)

    async def sign_in_with_oauth(self, provider: str, redirect_to: Optional[str]) -> str:
        credentials: dict[str, Any] = {"provider": provider}
        if redirect_to:
            credentials["options"] = {"redirect_to": redirect_to}

        with translate_supabase_errors("sign_in_with_oauth"):
            response = self._client.auth.sign_in_with_oauth(credentials)
        return response.url

    async def exchange_code_for_session(self, auth_code: str) -> Session:
        with translate_supabase_errors("exchange_code_for_session"):
            response = self._client.auth.exchange_code_for_session({"auth_code": auth_code})
        if response.session is None:
            raise UnauthorizedError("Sign-in link is invalid or has expired")
        return session_from_supabase(response.session)

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any],
    ) -> Optional[Session]:
        with translate_supabase_errors("sign_up", email=email):
            response = self._client.auth.sign_up(
                {"email": email, "password": password, "options": {"data": metadata}}
            )
        if response.session is None:
            return None
        return session_from_supabase(response.session)

    async def sign_out(self) -> None:
        with translate_supabase_errors("sign_out"):
            self._client.auth.sign_out()

    async def update_user(self, metadata: dict[str, Any]) -> ProviderUserRecord:
        with translate_supabase_errors("update_user"):
            response = self._client.auth.update_user({"data": metadata})
        return record_from_supabase_user(response.user)

    def watch(self, listener: SessionListener) -> None:
        def on_change(event: Any, session: Any) -> None:
            logger.debug("Supabase auth event: %s", event)
            listener(session_from_supabase(session) if session else None)

        self._client.auth.on_auth_state_change(on_change)
