"""Fallback identity resolvers."""

from typing import Any, Iterable, Optional

from shared.config import Settings
from modules.session.models import ProviderUserRecord, record_from_account

from .interfaces import IFallbackIdentityResolver


class DemoAccountResolver(IFallbackIdentityResolver):
    """Resolves demo accounts configured through the DEMO_ACCOUNTS setting."""

    def __init__(self, accounts: Iterable[dict[str, Any]] = ()):
        self._records: dict[str, ProviderUserRecord] = {}
        for data in accounts:
            record = record_from_account(data)
            self._records[record.email.lower()] = record

    @classmethod
    def from_settings(cls, settings: Settings) -> "DemoAccountResolver":
        return cls(settings.demo_accounts)

    def __len__(self) -> int:
        return len(self._records)

    def resolve(self, email: str) -> Optional[ProviderUserRecord]:
        return self._records.get(email.lower())
