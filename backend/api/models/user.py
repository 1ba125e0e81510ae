"""
User models for authentication.

These models represent authenticated user data extracted from JWT tokens.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Any, Optional
from datetime import datetime

from modules.session.models import ProviderUserRecord


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user from a valid JWT.

    This model is populated from the JWT claims and made available
    to route handlers via dependency injection.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)  # Ignore extra fields from JWT

    id: str  # Supabase user UUID
    email: EmailStr
    email_verified: bool = False

    # Timestamps
    last_sign_in: Optional[datetime] = None

    # Profile fields as stored by the storefront
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    def to_record(self) -> ProviderUserRecord:
        """Provider record as far as the token's claims describe it."""
        return ProviderUserRecord.from_metadata(
            id=self.id,
            email=self.email,
            metadata=self.user_metadata,
            email_verified=self.email_verified,
        )


class TokenPayload(BaseModel):
    """JWT token payload structure."""
    sub: str  # User ID
    email: str
    email_confirmed_at: Optional[str] = None
    aud: str  # Audience
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
    user_metadata: dict[str, Any] = Field(default_factory=dict)
