"""Supabase client shared by the ledger store and the health checks."""

import logging
from functools import lru_cache

from supabase import Client, create_client

from ..config import settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Return the cached client, or ``None`` when URL or key is missing.

    Creating the client does not contact the project, so a returned client
    can still fail on its first query.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as exc:
        logger.error("Failed to create Supabase client for %s: %s", settings.supabase_url, exc)
        return None
