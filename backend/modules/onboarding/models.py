"""
Onboarding module data models.
"""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from modules.session.models import AccountType, ProviderUserRecord


class OnboardingStep(IntEnum):
    """Wizard steps, in order."""

    IDENTITY = 1
    INTERESTS = 2
    SUMMARY = 3


INTEREST_CATALOG: tuple[str, ...] = (
    "Web Development",
    "Mobile Apps",
    "E-commerce",
    "SaaS Tools",
    "WordPress Plugins",
    "API Services",
    "UI/UX Design",
    "Analytics",
    "Marketing Tools",
    "Productivity Apps",
)


class OnboardingDraft(BaseModel):
    """
    Values collected by the wizard.

    Lives only as long as the wizard; nothing is sent anywhere until the
    summary step is confirmed.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    account_type: AccountType = AccountType.BUYER
    company: str = ""
    bio: str = ""
    interests: frozenset[str] = Field(default_factory=frozenset)

    @classmethod
    def from_record(cls, record: Optional[ProviderUserRecord]) -> "OnboardingDraft":
        """Pre-fill from what the user typed at sign-up, if anything."""
        if record is None:
            return cls()
        return cls(
            name=record.name,
            account_type=record.signup_account_type or AccountType.BUYER,
            company=record.signup_company or "",
        )


class FieldError(BaseModel):
    """An error shown next to a form field, or above the form when field is None."""

    model_config = ConfigDict(frozen=True)

    field: Optional[str] = None
    message: str


class OnboardingSummary(BaseModel):
    """Read-only recap shown on the summary step."""

    model_config = ConfigDict(frozen=True)

    name: str
    account_type: AccountType
    company: Optional[str] = None
    bio: str = ""
    interests: list[str] = Field(default_factory=list)
