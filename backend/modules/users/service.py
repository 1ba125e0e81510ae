"""
User model synchronizer.

Keeps the canonical User in step with the Session Adapter.
"""

import logging
from typing import Optional

from modules.session.interfaces import ISessionAdapter, Unsubscribe
from modules.session.models import AccountType, ProviderUserRecord, Session

from .interfaces import IFallbackIdentityResolver, UserListener
from .mapping import merge_fallback, to_canonical_user
from .models import User

logger = logging.getLogger(__name__)


class UserModelSynchronizer:
    """
    Derives the canonical User from session notifications.

    It is the Session Adapter's sole subscriber; everything else observes
    the User through subscribe(). Notifications are applied in arrival
    order.
    """

    def __init__(
        self,
        session: ISessionAdapter,
        fallback: Optional[IFallbackIdentityResolver] = None,
    ):
        self._fallback = fallback
        self._user: Optional[User] = None
        self._record: Optional[ProviderUserRecord] = None
        self._listeners: list[UserListener] = []
        self._unsubscribe = session.subscribe(self._on_session_changed)
        self._apply(session.current_session())

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    @property
    def current_record(self) -> Optional[ProviderUserRecord]:
        """Provider record behind the current user, after fallback merging."""
        return self._record

    def subscribe(self, listener: UserListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Stop listening to the Session Adapter."""
        self._unsubscribe()

    def mark_onboarded(
        self,
        name: str,
        account_type: AccountType,
        company: Optional[str] = None,
    ) -> Optional[User]:
        """
        Optimistically complete onboarding for the current user.

        Does nothing when there is no user or onboarding already completed,
        so a chosen account type is never overwritten.
        """
        user = self._user
        if user is None or not user.needs_onboarding:
            return user

        updated = user.model_copy(
            update={
                "name": name,
                "account_type": account_type,
                "company": company if account_type == AccountType.BUYER else None,
                "needs_onboarding": False,
            }
        )
        logger.info("User %s completed onboarding as %s", user.id, account_type.value)
        self._set(updated)
        return updated

    def _on_session_changed(self, session: Optional[Session]) -> None:
        self._apply(session)

    def _apply(self, session: Optional[Session]) -> None:
        if session is None:
            self._record = None
            self._set(None)
            return

        record = session.user
        if self._fallback is not None:
            record = merge_fallback(record, self._fallback.resolve(record.email))
        self._record = record

        user = to_canonical_user(record)
        current = self._user
        if (
            current is not None
            and current.id == user.id
            and not current.needs_onboarding
            and user.needs_onboarding
        ):
            # A stale record must not undo a local completion.
            user = current
        self._set(user)

    def _set(self, user: Optional[User]) -> None:
        if user == self._user:
            return
        self._user = user
        for listener in list(self._listeners):
            listener(user)
