"""
Supabase client factory.

The client is created on first use so that importing the application (or
running the test suite) does not require database credentials.
"""

import logging
from functools import lru_cache

from supabase import Client, create_client

from app.core.config import settings

logger = logging.getLogger("Insights.Database")


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """Get the singleton Supabase client."""
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set")

    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    logger.info("Supabase client initialized")
    return client
