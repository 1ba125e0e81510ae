"""
Client factory for Supabase.

Provides the service-role client (server-side admin operations such as the
profile-update endpoint) and the anon client the Session Adapter signs
users in with.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

# Module-level client cache
_service_client: Optional[Client] = None
_anon_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Use this for backend operations that need admin access,
    such as updating a user's metadata on their behalf.

    Returns:
        Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def get_supabase_anon_client() -> Client:
    """
    Get Supabase client with the public anon key.

    This is the client end users authenticate through. It keeps the
    signed-in session, so one instance is shared per process.

    Returns:
        Supabase client configured with the anon key
    """
    global _anon_client

    if _anon_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
            )
        _anon_client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _anon_client


def reset_client_cache() -> None:
    """
    Reset the cached clients.

    Useful for testing or when configuration changes.
    """
    global _service_client, _anon_client
    _service_client = None
    _anon_client = None
