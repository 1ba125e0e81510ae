"""
Provider record to canonical user mapping.

Shared by the client-side synchronizer and the API, so both derive the
onboarding flag the same way.
"""

from datetime import date
from typing import Optional

from modules.session.models import AccountType, ProviderUserRecord

from .models import User

# Fields a fallback record may fill in when the provider record lacks them
FALLBACK_FIELDS = (
    "name",
    "account_type",
    "company",
    "needs_onboarding",
    "avatar_url",
    "rating",
    "total_sales",
    "created_at",
)


def merge_fallback(
    record: ProviderUserRecord,
    fallback: Optional[ProviderUserRecord],
) -> ProviderUserRecord:
    """Fill fields missing on record from a fallback record for the same email."""
    if fallback is None or fallback.email.lower() != record.email.lower():
        return record

    updates = {}
    for field_name in FALLBACK_FIELDS:
        if getattr(record, field_name) in (None, "") and getattr(fallback, field_name) not in (None, ""):
            updates[field_name] = getattr(fallback, field_name)
    if fallback.verified and not record.verified:
        updates["verified"] = True

    return record.model_copy(update=updates) if updates else record


def needs_onboarding(record: ProviderUserRecord) -> bool:
    """
    Whether the account still has to go through onboarding.

    A missing flag or a missing account type both mean "not onboarded",
    whatever the verification state.
    """
    return not record.is_onboarded


def to_canonical_user(record: ProviderUserRecord) -> User:
    """Build the canonical User from a provider record."""
    pending = needs_onboarding(record)
    account_type: Optional[AccountType] = None if pending else record.account_type
    company = record.company if account_type == AccountType.BUYER else None
    joined = record.created_at.date() if record.created_at else date.today()

    return User(
        id=record.id,
        email=record.email,
        name="" if pending else record.name,
        account_type=account_type,
        company=company,
        verified=record.verified or record.email_verified,
        needs_onboarding=pending,
        joined_date=joined,
        avatar_url=record.avatar_url,
        rating=record.rating,
        total_sales=record.total_sales,
    )
