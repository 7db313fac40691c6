"""
Supabase client for the user store.

Only this backend writes the users table, so one client built from the
service role key is shared by every request. It is created on first use,
which keeps USER_STORE=memory deployments free of Supabase settings.
"""

import logging
from typing import Optional
from supabase import create_client, Client

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

_client: Optional[Client] = None


def get_supabase_client(settings: Optional[Settings] = None) -> Client:
    """
    Return the shared service-role client, creating it if needed.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    global _client

    if _client is None:
        settings = settings or get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "The supabase user store needs SUPABASE_URL and "
                "SUPABASE_SERVICE_ROLE_KEY; set them or use USER_STORE=memory."
            )
        _client = create_client(settings.supabase_url, settings.supabase_service_role_key)
        logger.info("User store connected to %s", settings.supabase_url)

    return _client


def reset_client_cache() -> None:
    """Drop the shared client (for tests and configuration changes)."""
    global _client
    _client = None
