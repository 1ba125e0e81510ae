"""
Session module data models.

These models describe what the identity provider hands back (sessions and
raw user records) and the partial profile update sent to it.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from .exceptions import AccountTypeLockedError


class AccountType(str, Enum):
    """Marketplace role chosen during onboarding."""

    SELLER = "seller"
    BUYER = "buyer"


def parse_account_type(value: Any) -> Optional[AccountType]:
    """Parse a stored account type, treating anything unknown as unset."""
    if isinstance(value, AccountType):
        return value
    try:
        return AccountType(value)
    except ValueError:
        return None


class ProviderUserRecord(BaseModel):
    """
    Raw user record as stored by the identity provider.

    Profile fields live in the provider's user metadata. A missing
    needs_onboarding means the account never finished onboarding.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., description="Provider user ID")
    email: str = Field(..., description="Account email")
    name: str = Field(default="", description="Display name")
    account_type: Optional[AccountType] = Field(None, description="Metadata key 'type'")
    company: Optional[str] = Field(None, description="Company (buyers)")
    verified: bool = Field(default=False, description="Marketplace verification flag")
    email_verified: bool = Field(default=False, description="Email confirmed by provider")
    needs_onboarding: Optional[bool] = Field(None, description="Absent until set by the app")
    created_at: Optional[datetime] = Field(None, description="Account creation time")
    avatar_url: Optional[str] = None
    rating: Optional[float] = None
    total_sales: Optional[int] = None

    # Values typed on the sign-up form, used to pre-fill onboarding
    signup_account_type: Optional[AccountType] = None
    signup_company: Optional[str] = None

    @property
    def is_onboarded(self) -> bool:
        """True once onboarding stored both a role and needs_onboarding=false."""
        return self.account_type is not None and self.needs_onboarding is False

    @classmethod
    def from_metadata(
        cls,
        *,
        id: str,
        email: str,
        metadata: Optional[dict[str, Any]] = None,
        email_verified: bool = False,
        created_at: Optional[datetime] = None,
    ) -> "ProviderUserRecord":
        """Build a record from provider user metadata."""
        metadata = metadata or {}
        needs_onboarding = metadata.get("needs_onboarding")
        return cls(
            id=id,
            email=email,
            name=metadata.get("name") or metadata.get("full_name") or "",
            account_type=parse_account_type(metadata.get("type")),
            company=metadata.get("company") or None,
            verified=bool(metadata.get("verified", False)),
            email_verified=email_verified or bool(metadata.get("email_verified", False)),
            needs_onboarding=None if needs_onboarding is None else bool(needs_onboarding),
            created_at=created_at,
            avatar_url=metadata.get("avatar_url") or metadata.get("picture"),
            rating=metadata.get("rating"),
            total_sales=metadata.get("total_sales"),
            signup_account_type=parse_account_type(metadata.get("signup_type")),
            signup_company=metadata.get("signup_company") or None,
        )


# Keys of a configured account entry that are not user metadata
ACCOUNT_KEYS = frozenset({"id", "email", "password", "created_at", "email_verified"})


def account_metadata(data: dict[str, Any]) -> dict[str, Any]:
    """User metadata part of a configured account entry."""
    return {key: value for key, value in data.items() if key not in ACCOUNT_KEYS}


def record_from_account(data: dict[str, Any]) -> ProviderUserRecord:
    """
    Build a record from a configured account entry.

    Entries look like ``{"id": ..., "email": ..., "created_at": ...,
    "email_verified": ..., **metadata}``; a ``password`` key is ignored.
    """
    metadata = account_metadata(data)
    email = data["email"]
    return ProviderUserRecord.from_metadata(
        id=str(data.get("id") or email),
        email=email,
        metadata=metadata,
        email_verified=bool(data.get("email_verified", False)),
        created_at=data.get("created_at"),
    )


class Session(BaseModel):
    """An identity provider's proof of authentication."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    user: ProviderUserRecord


class ProfileUpdate(BaseModel):
    """
    Partial profile update.

    Accepts the wire names used by the storefront client
    (``accountType``/``type``, ``needsOnboarding``) as well as the Python ones.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    account_type: Optional[AccountType] = Field(
        None,
        validation_alias=AliasChoices("accountType", "type", "account_type"),
    )
    company: Optional[str] = None
    needs_onboarding: Optional[bool] = Field(
        None,
        validation_alias=AliasChoices("needsOnboarding", "needs_onboarding"),
    )

    @model_validator(mode="after")
    def _check_onboarding_transition(self) -> "ProfileUpdate":
        if self.needs_onboarding is True:
            raise ValueError("Onboarding cannot be reopened once completed")
        if self.needs_onboarding is False and self.account_type is None:
            raise ValueError("accountType is required to complete onboarding")
        return self

    def check_account_type(self, current: ProviderUserRecord) -> None:
        """
        Refuse to change the role of an account that finished onboarding.

        Sending the role it already has is allowed.

        Raises:
            AccountTypeLockedError: If the update would switch the role
        """
        if self.account_type is None or not current.is_onboarded:
            return
        if self.account_type != current.account_type:
            raise AccountTypeLockedError(current.account_type.value, self.account_type.value)

    def to_metadata(self) -> dict[str, Any]:
        """Provider metadata for the fields present in this update."""
        metadata: dict[str, Any] = {}
        if self.name is not None:
            metadata["name"] = self.name
        if self.account_type is not None:
            metadata["type"] = self.account_type.value
        if self.company is not None:
            metadata["company"] = self.company
        if self.needs_onboarding is not None:
            metadata["needs_onboarding"] = self.needs_onboarding
        return metadata
