"""Tests for the Supabase Auth identity provider."""

import httpx
import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock
from supabase_auth.errors import (
    AuthApiError,
    AuthError,
    AuthInvalidCredentialsError,
    AuthRetryableError,
    AuthSessionMissingError,
    AuthUnknownError,
    AuthWeakPasswordError,
)

from shared.exceptions import ExternalServiceError, ValidationError
from modules.session.exceptions import (
    EmailTakenError,
    InvalidCredentialsError,
    NetworkError,
    UnauthorizedError,
    WeakPasswordError,
)
from modules.session.models import AccountType
from modules.session.service import SessionAdapter
from modules.session.supabase_provider import (
    SupabaseIdentityProvider,
    record_from_supabase_user,
    translate_auth_error,
    translate_supabase_errors,
)


def make_supabase_user(user_id="user-123", email="test@example.com", metadata=None, confirmed=True):
    user = MagicMock()
    user.id = user_id
    user.email = email
    user.user_metadata = metadata or {}
    user.email_confirmed_at = datetime(2024, 1, 2, tzinfo=timezone.utc) if confirmed else None
    user.created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return user


def make_supabase_session(user=None):
    session = MagicMock()
    session.access_token = "access"
    session.refresh_token = "refresh"
    session.expires_at = 1700000000
    session.user = user or make_supabase_user()
    return session


class TestRecordMapping:
    def test_record_from_supabase_user(self):
        user = make_supabase_user(metadata={"name": "Alice", "type": "seller", "needs_onboarding": False})
        record = record_from_supabase_user(user)
        assert record.id == "user-123"
        assert record.account_type == AccountType.SELLER
        assert record.email_verified is True
        assert record.created_at.year == 2024

    def test_unconfirmed_email(self):
        record = record_from_supabase_user(make_supabase_user(confirmed=False))
        assert record.email_verified is False


class TestTranslateAuthError:
    def test_email_taken(self):
        error = AuthApiError("User already registered", 422, "user_already_exists")
        translated = translate_auth_error("sign_up", error, "a@example.com")
        assert isinstance(translated, EmailTakenError)
        assert translated.message == "User already registered"
        assert translated.details["email"] == "a@example.com"

    def test_invalid_credentials_code(self):
        error = AuthApiError("Invalid login credentials", 400, "invalid_credentials")
        assert isinstance(translate_auth_error("sign_in_with_password", error), InvalidCredentialsError)

    def test_sign_in_bad_request_without_code(self):
        error = AuthApiError("Invalid login credentials", 400, None)
        assert isinstance(translate_auth_error("sign_in_with_password", error), InvalidCredentialsError)

    def test_unauthorized_status(self):
        error = AuthApiError("JWT expired", 401, None)
        assert isinstance(translate_auth_error("update_user", error), UnauthorizedError)

    def test_server_error_is_network_error(self):
        error = AuthApiError("Service unavailable", 503, None)
        assert isinstance(translate_auth_error("sign_up", error), NetworkError)

    def test_other_errors(self):
        error = AuthApiError("Signups not allowed", 422, "signup_disabled")
        translated = translate_auth_error("sign_up", error)
        assert isinstance(translated, ExternalServiceError)
        assert translated.code == "signup_disabled"
        assert translated.service == "supabase"

    def test_weak_password_code(self):
        error = AuthApiError("Password is too weak", 422, "weak_password")
        translated = translate_auth_error("sign_up", error)
        assert isinstance(translated, WeakPasswordError)
        assert translated.message == "Password is too weak"


class TestTranslateSupabaseErrors:
    """Every supabase-auth error leaves the context as a storefront error."""

    def test_weak_password_keeps_message_and_reasons(self):
        with pytest.raises(WeakPasswordError) as exc_info:
            with translate_supabase_errors("sign_up"):
                raise AuthWeakPasswordError("Password should be at least 6 characters", 422, ["length"])
        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.message == "Password should be at least 6 characters"
        assert exc_info.value.details == {"reasons": ["length"]}
        assert isinstance(exc_info.value.__cause__, AuthWeakPasswordError)

    def test_invalid_credentials_subclass(self):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            with translate_supabase_errors("sign_in_with_password"):
                raise AuthInvalidCredentialsError("Invalid login credentials")
        assert exc_info.value.message == "Invalid login credentials"

    def test_unknown_error_is_network_error(self):
        with pytest.raises(NetworkError) as exc_info:
            with translate_supabase_errors("sign_out"):
                raise AuthUnknownError("Bad gateway", None)
        assert exc_info.value.message == "Bad gateway"

    def test_unlisted_auth_error_is_external_service_error(self):
        with pytest.raises(ExternalServiceError) as exc_info:
            with translate_supabase_errors("get_session"):
                raise AuthError("Something odd", "unexpected_failure")
        assert exc_info.value.service == "supabase"
        assert exc_info.value.code == "unexpected_failure"

    def test_other_exceptions_pass_through(self):
        with pytest.raises(KeyError):
            with translate_supabase_errors("get_session"):
                raise KeyError("user")


class TestSupabaseIdentityProvider:
    @pytest.fixture
    def client(self):
        return MagicMock()

    @pytest.fixture
    def provider(self, client):
        return SupabaseIdentityProvider(client)

    @pytest.mark.asyncio
    async def test_get_session_none(self, provider, client):
        client.auth.get_session.return_value = None
        assert await provider.get_session() is None

    @pytest.mark.asyncio
    async def test_sign_in_with_password(self, provider, client):
        client.auth.sign_in_with_password.return_value.session = make_supabase_session()
        session = await provider.sign_in_with_password("test@example.com", "pw")
        assert session.access_token == "access"
        assert session.user.id == "user-123"
        client.auth.sign_in_with_password.assert_called_once_with(
            {"email": "test@example.com", "password": "pw"}
        )

    @pytest.mark.asyncio
    async def test_sign_in_invalid_credentials(self, provider, client):
        client.auth.sign_in_with_password.side_effect = AuthApiError(
            "Invalid login credentials", 400, "invalid_credentials"
        )
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await provider.sign_in_with_password("test@example.com", "wrong")
        assert exc_info.value.message == "Invalid login credentials"

    @pytest.mark.asyncio
    async def test_sign_in_transport_error(self, provider, client):
        client.auth.sign_in_with_password.side_effect = httpx.ConnectError("connection refused")
        with pytest.raises(NetworkError):
            await provider.sign_in_with_password("test@example.com", "pw")

    @pytest.mark.asyncio
    async def test_retryable_error(self, provider, client):
        client.auth.get_session.side_effect = AuthRetryableError("Gateway timeout", 504)
        with pytest.raises(NetworkError):
            await provider.get_session()

    @pytest.mark.asyncio
    async def test_sign_in_with_oauth(self, provider, client):
        client.auth.sign_in_with_oauth.return_value.url = "https://supabase/authorize?provider=google"
        url = await provider.sign_in_with_oauth("google", "http://app/cb")
        assert url == "https://supabase/authorize?provider=google"
        client.auth.sign_in_with_oauth.assert_called_once_with(
            {"provider": "google", "options": {"redirect_to": "http://app/cb"}}
        )

    @pytest.mark.asyncio
    async def test_exchange_code(self, provider, client):
        client.auth.exchange_code_for_session.return_value.session = make_supabase_session()
        session = await provider.exchange_code_for_session("code-1")
        assert session.user.id == "user-123"
        client.auth.exchange_code_for_session.assert_called_once_with({"auth_code": "code-1"})

    @pytest.mark.asyncio
    async def test_sign_up_sends_metadata(self, provider, client):
        client.auth.sign_up.return_value.session = make_supabase_session()
        await provider.sign_up("test@example.com", "pw", {"name": "T", "needs_onboarding": True})
        client.auth.sign_up.assert_called_once_with(
            {
                "email": "test@example.com",
                "password": "pw",
                "options": {"data": {"name": "T", "needs_onboarding": True}},
            }
        )

    @pytest.mark.asyncio
    async def test_sign_up_pending_confirmation(self, provider, client):
        client.auth.sign_up.return_value.session = None
        assert await provider.sign_up("test@example.com", "pw", {}) is None

    @pytest.mark.asyncio
    async def test_sign_up_email_taken(self, provider, client):
        client.auth.sign_up.side_effect = AuthApiError("User already registered", 422, "user_already_exists")
        with pytest.raises(EmailTakenError) as exc_info:
            await provider.sign_up("test@example.com", "pw", {})
        assert exc_info.value.details["email"] == "test@example.com"

    @pytest.mark.asyncio
    async def test_update_user(self, provider, client):
        client.auth.update_user.return_value.user = make_supabase_user(
            metadata={"type": "buyer", "company": "Acme", "needs_onboarding": False}
        )
        record = await provider.update_user({"type": "buyer"})
        assert record.account_type == AccountType.BUYER
        client.auth.update_user.assert_called_once_with({"data": {"type": "buyer"}})

    @pytest.mark.asyncio
    async def test_update_user_without_session(self, provider, client):
        client.auth.update_user.side_effect = AuthSessionMissingError()
        with pytest.raises(UnauthorizedError):
            await provider.update_user({"name": "X"})

    @pytest.mark.asyncio
    async def test_sign_up_weak_password(self, provider, client):
        client.auth.sign_up.side_effect = AuthWeakPasswordError(
            "Password should be at least 6 characters", 422, ["length"]
        )
        with pytest.raises(WeakPasswordError) as exc_info:
            await provider.sign_up("test@example.com", "pw", {})
        assert exc_info.value.message == "Password should be at least 6 characters"

    @pytest.mark.asyncio
    async def test_sign_out_unknown_error(self, provider, client):
        client.auth.sign_out.side_effect = AuthUnknownError("Bad gateway", None)
        with pytest.raises(NetworkError):
            await provider.sign_out()

    @pytest.mark.asyncio
    async def test_adapter_sign_out_survives_unknown_error(self, provider, client):
        client.auth.sign_in_with_password.return_value.session = make_supabase_session()
        client.auth.sign_out.side_effect = AuthUnknownError("Bad gateway", None)
        adapter = SessionAdapter(provider)
        await adapter.sign_in_with_password("test@example.com", "pw")

        await adapter.sign_out()

        assert adapter.current_session() is None

    def test_watch_translates_events(self, provider, client):
        seen = []
        provider.watch(seen.append)
        callback = client.auth.on_auth_state_change.call_args[0][0]

        callback("SIGNED_IN", make_supabase_session())
        callback("SIGNED_OUT", None)

        assert seen[0].user.id == "user-123"
        assert seen[1] is None
