"""
Profile service implementation.

Updates user metadata through the Supabase admin API, on behalf of a user
whose access token the API has already verified.
"""

import logging
from typing import Optional

from supabase import Client

from shared.database import get_supabase_client
from modules.session.models import ProfileUpdate, ProviderUserRecord
from modules.session.supabase_provider import record_from_supabase_user, translate_supabase_errors

from .interfaces import IProfileService

logger = logging.getLogger(__name__)


class ProfileService(IProfileService):
    """Implementation of the profile service backed by Supabase Auth."""

    def __init__(self, client: Optional[Client] = None):
        self._db = client or get_supabase_client()

    async def update_profile(self, user_id: str, fields: ProfileUpdate) -> ProviderUserRecord:
        """
        Merge the update into the user's metadata.

        A role change is checked against the stored record first, so an
        onboarded account keeps the role it chose.
        """
        if fields.account_type is not None:
            with translate_supabase_errors("update_profile"):
                current = self._db.auth.admin.get_user_by_id(user_id)
            fields.check_account_type(record_from_supabase_user(current.user))

        with translate_supabase_errors("update_profile"):
            response = self._db.auth.admin.update_user_by_id(
                user_id,
                {"user_metadata": fields.to_metadata()},
            )
        logger.info("Updated profile for user %s", user_id)
        return record_from_supabase_user(response.user)
