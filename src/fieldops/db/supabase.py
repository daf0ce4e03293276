"""Supabase client shared by the Supabase-backed stores."""

from __future__ import annotations

import logging
from functools import lru_cache

from supabase import Client, create_client

from ..config import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client | None:
    """Cached client, or None when URL or key is unset.

    Creating the client does not contact the server; the first query does.
    """
    url, key = settings.supabase_url, settings.supabase_key
    if not url or not key:
        logger.warning("Supabase credentials not configured (FIELDOPS_SUPABASE_URL / FIELDOPS_SUPABASE_KEY)")
        return None

    try:
        client = create_client(url, key)
    except Exception as e:
        logger.error(f"Failed to create Supabase client for {url}: {e}")
        return None
    logger.info(f"Supabase client created for {url}")
    return client


def check_table(client: Client, table: str) -> tuple[bool, str | None]:
    """One-row select against ``table``. Returns (reachable, error message)."""
    try:
        client.table(table).select("id").limit(1).execute()
    except Exception as e:
        return False, str(e)
    return True, None
