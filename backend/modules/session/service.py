"""
Session adapter implementation.

Wraps an identity provider and owns the observable current session.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, Optional

from .interfaces import IIdentityProvider, ISessionAdapter, SessionListener, Unsubscribe
from .models import AccountType, ProfileUpdate, ProviderUserRecord, Session
from .exceptions import (
    ConfirmationRequiredError,
    OperationInProgressError,
    UnauthorizedError,
    UnsupportedProviderError,
)

logger = logging.getLogger(__name__)


class SessionAdapter(ISessionAdapter):
    """
    Implementation of the session adapter.

    Every session change, whether caused by one of the operations below or
    reported by the provider (token refresh, remote sign-out, redirect
    completion), goes through _emit so subscribers see changes in order.
    """

    def __init__(
        self,
        provider: IIdentityProvider,
        redirect_to: Optional[str] = None,
        social_providers: Optional[Iterable[str]] = None,
    ):
        self._provider = provider
        self._redirect_to = redirect_to
        self._social_providers = (
            frozenset(social_providers) if social_providers is not None else None
        )
        self._session: Optional[Session] = None
        self._listeners: list[SessionListener] = []
        self._in_flight: set[str] = set()
        provider.watch(self._emit)

    def current_session(self) -> Optional[Session]:
        return self._session

    def subscribe(self, listener: SessionListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def is_in_flight(self, operation: str) -> bool:
        return operation in self._in_flight

    async def restore(self) -> Optional[Session]:
        session = await self._provider.get_session()
        self._emit(session)
        return session

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        async with self._guard("sign_in_with_password"):
            session = await self._provider.sign_in_with_password(email, password)
        logger.info("User %s signed in with password", session.user.id)
        self._emit(session)
        return session

    async def sign_in_with_provider(self, provider_name: str) -> str:
        if self._social_providers is not None and provider_name not in self._social_providers:
            raise UnsupportedProviderError(provider_name)

        async with self._guard("sign_in_with_provider"):
            url = await self._provider.sign_in_with_oauth(provider_name, self._redirect_to)
        logger.info("Started %s sign-in redirect", provider_name)
        return url

    async def complete_provider_sign_in(self, auth_code: str) -> Session:
        async with self._guard("complete_provider_sign_in"):
            session = await self._provider.exchange_code_for_session(auth_code)
        logger.info("User %s signed in through a social provider", session.user.id)
        self._emit(session)
        return session

    async def sign_up(
        self,
        email: str,
        password: str,
        name: str,
        account_type: AccountType,
        company: Optional[str] = None,
    ) -> Session:
        # The chosen role is only a hint until onboarding sets "type".
        metadata = {
            "name": name,
            "signup_type": AccountType(account_type).value,
            "needs_onboarding": True,
        }
        if company:
            metadata["signup_company"] = company

        async with self._guard("sign_up"):
            session = await self._provider.sign_up(email, password, metadata)
        if session is None:
            raise ConfirmationRequiredError(email)

        logger.info("User %s signed up", session.user.id)
        self._emit(session)
        return session

    async def sign_out(self) -> None:
        async with self._guard("sign_out"):
            try:
                await self._provider.sign_out()
            except Exception as e:
                # Local sign-out must succeed whatever the provider does.
                logger.warning("Remote sign-out failed, clearing local session: %s", e)
            finally:
                self._emit(None)

    async def update_profile(self, fields: ProfileUpdate) -> ProviderUserRecord:
        if self._session is None:
            raise UnauthorizedError()

        fields.check_account_type(self._session.user)
        async with self._guard("update_profile"):
            record = await self._provider.update_user(fields.to_metadata())

        # A sign-out while the update was running must not be undone.
        if self._session is not None:
            self._emit(self._session.model_copy(update={"user": record}))
        return record

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncIterator[None]:
        """Allow at most one in-flight call per operation."""
        if operation in self._in_flight:
            raise OperationInProgressError(operation)
        self._in_flight.add(operation)
        try:
            yield
        finally:
            self._in_flight.discard(operation)

    def _emit(self, session: Optional[Session]) -> None:
        if session == self._session:
            return
        self._session = session
        logger.debug("Session changed: %s", session.user.id if session else None)
        for listener in list(self._listeners):
            listener(session)
