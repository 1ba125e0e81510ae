"""
User-related endpoints.

Provides the signed-in user's canonical profile.
"""

from fastapi import APIRouter, Depends

from modules.users.mapping import to_canonical_user
from modules.users.models import User
from ..middleware.auth import get_current_user
from ..models.user import AuthenticatedUser

router = APIRouter()


@router.get("/me", response_model=User)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
) -> User:
    """
    Get the current user's canonical profile.

    Derived from the token's claims, so needs_onboarding follows the same
    rules as on the client. Requires authentication.
    """
    return to_canonical_user(user.to_record())
