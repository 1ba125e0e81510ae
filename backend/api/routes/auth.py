"""
Authentication endpoints.

Provides the profile-update mutation used to complete onboarding.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from shared.exceptions import AuthenticationError, StorefrontError, ValidationError
from modules.profiles.interfaces import IProfileService
from modules.session.models import ProfileUpdate
from modules.users.mapping import to_canonical_user
from modules.users.models import User
from ..dependencies import get_profile_service
from ..middleware.auth import AuthError, get_current_user
from ..models.errors import ErrorResponse
from ..models.user import AuthenticatedUser

logger = logging.getLogger(__name__)

router = APIRouter()


class ProfileUpdateResponse(BaseModel):
    """Profile update response model."""

    user: User


@router.post(
    "/update-profile",
    response_model=ProfileUpdateResponse,
    responses={
        401: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def update_profile(
    body: ProfileUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    profiles: IProfileService = Depends(get_profile_service),
) -> ProfileUpdateResponse:
    """
    Update the signed-in user's profile.

    Accepts ``{name, accountType, company, needsOnboarding}``; omitted
    fields are left unchanged.
    """
    try:
        record = await profiles.update_profile(user.id, body)
    except AuthenticationError as e:
        raise AuthError(e.message) from e
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.message,
        ) from e
    except StorefrontError as e:
        logger.error("Profile update error for user %s: %s", user.id, e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile",
        ) from e

    return ProfileUpdateResponse(user=to_canonical_user(record))
