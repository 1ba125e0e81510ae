"""
User module data models.

The canonical User is what the rest of the storefront reasons about. It is
derived from the identity provider's record, never edited directly.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from modules.session.models import AccountType


class User(BaseModel):
    """
    Canonical storefront user.

    While needs_onboarding is true, name, account_type and company stay
    empty; they are filled exactly once when onboarding completes.
    """

    id: str = Field(..., description="Provider user ID")
    email: str = Field(..., description="Account email")
    name: str = Field(default="", description="Display name")
    account_type: Optional[AccountType] = Field(None, description="Seller or buyer")
    company: Optional[str] = Field(None, description="Company, buyers only")
    verified: bool = Field(default=False, description="Verified by the provider")
    needs_onboarding: bool = Field(default=True, description="Onboarding still pending")
    joined_date: date = Field(..., description="Account creation date")

    avatar_url: Optional[str] = None
    rating: Optional[float] = None
    total_sales: Optional[int] = None

    model_config = {"frozen": True}

    @property
    def is_seller(self) -> bool:
        return self.account_type == AccountType.SELLER

    @property
    def is_buyer(self) -> bool:
        return self.account_type == AccountType.BUYER


__all__ = ["AccountType", "User"]
