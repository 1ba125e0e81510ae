"""
In-memory identity provider.

Used for local demos and tests. Accounts live in a dict; the federated
redirect is simulated with one-time authorization codes.
"""

import secrets
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from shared.config import Settings

from .interfaces import IIdentityProvider, SessionListener
from .models import ProviderUserRecord, Session, account_metadata, record_from_account
from .exceptions import EmailTakenError, InvalidCredentialsError, UnauthorizedError


@dataclass
class _Account:
    id: str
    email: str
    password: Optional[str]
    email_verified: bool
    created_at: datetime
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> ProviderUserRecord:
        return ProviderUserRecord.from_metadata(
            id=self.id,
            email=self.email,
            metadata=self.metadata,
            email_verified=self.email_verified,
            created_at=self.created_at,
        )


class InMemoryIdentityProvider(IIdentityProvider):
    """
    Identity provider that keeps everything in process memory.

    Demo accounts use the same shape as the DEMO_ACCOUNTS setting:
    ``{"email": ..., "password": ..., "name": ..., "type": ..., ...}``.
    """

    def __init__(self, accounts: Iterable[dict[str, Any]] = ()):
        self._accounts: dict[str, _Account] = {}
        self._session: Optional[Session] = None
        self._pending_codes: dict[str, str] = {}
        self._authorized_codes: dict[str, dict[str, Any]] = {}
        self._listeners: list[SessionListener] = []

        for data in accounts:
            record = record_from_account(data)
            metadata = account_metadata(data)
            self._accounts[record.email.lower()] = _Account(
                id=record.id,
                email=record.email,
                password=data.get("password"),
                email_verified=record.email_verified,
                created_at=record.created_at or datetime.now(timezone.utc),
                metadata=metadata,
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "InMemoryIdentityProvider":
        """Create a provider seeded with the configured demo accounts."""
        return cls(settings.demo_accounts)

    async def get_session(self) -> Optional[Session]:
        return self._session

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        account = self._accounts.get(email.lower())
        if account is None or account.password is None or account.password != password:
            raise InvalidCredentialsError("Invalid login credentials")
        return self._start_session(account)

    async def sign_in_with_oauth(self, provider: str, redirect_to: Optional[str]) -> str:
        code = secrets.token_urlsafe(16)
        self._pending_codes[code] = provider
        return f"{redirect_to or ''}?code={code}&provider={provider}"

    def authorize(self, auth_code: str, email: str, name: str = "") -> None:
        """
        Simulate the user consenting at the social provider.

        Only authorized codes can be exchanged for a session.
        """
        provider = self._pending_codes.pop(auth_code, None)
        if provider is None:
            raise UnauthorizedError("Sign-in link is invalid or has expired")
        self._authorized_codes[auth_code] = {"email": email, "name": name, "provider": provider}

    async def exchange_code_for_session(self, auth_code: str) -> Session:
        identity = self._authorized_codes.pop(auth_code, None)
        if identity is None:
            raise UnauthorizedError("Sign-in link is invalid or has expired")

        account = self._accounts.get(identity["email"].lower())
        if account is None:
            # Federated sign-up: the provider profile carries no onboarding flag.
            account = _Account(
                id=str(uuid.uuid4()),
                email=identity["email"],
                password=None,
                email_verified=True,
                created_at=datetime.now(timezone.utc),
                metadata={"full_name": identity["name"], "provider": identity["provider"]},
            )
            self._accounts[account.email.lower()] = account
        return self._start_session(account)

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any],
    ) -> Optional[Session]:
        if email.lower() in self._accounts:
            raise EmailTakenError(email, "User already registered")

        account = _Account(
            id=str(uuid.uuid4()),
            email=email,
            password=password,
            email_verified=False,
            created_at=datetime.now(timezone.utc),
            metadata=dict(metadata),
        )
        self._accounts[email.lower()] = account
        return self._start_session(account)

    async def sign_out(self) -> None:
        self._session = None

    async def update_user(self, metadata: dict[str, Any]) -> ProviderUserRecord:
        if self._session is None:
            raise UnauthorizedError("Auth session missing!")

        account = self._accounts[self._session.user.email.lower()]
        account.metadata.update(metadata)
        record = account.to_record()
        self._session = self._session.model_copy(update={"user": record})
        return record

    def watch(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def expire_session(self) -> None:
        """Drop the session as if it expired remotely, notifying watchers."""
        self._session = None
        for listener in list(self._listeners):
            listener(None)

    def _start_session(self, account: _Account) -> Session:
        self._session = Session(
            access_token=secrets.token_urlsafe(32),
            refresh_token=secrets.token_urlsafe(32),
            user=account.to_record(),
        )
        return self._session
