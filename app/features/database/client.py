"""
Database Client - Unified Access to the Insight Repositories

Provides organized access to data through domain-specific repositories.
This is a thin wrapper that delegates to focused repository classes.
"""

import logging
from functools import lru_cache
from typing import Optional

from app.core.database import get_supabase
from app.features.database.repositories.goals import GoalsRepository
from app.features.database.repositories.insights import InsightsRepository
from app.features.database.repositories.journals import JournalsRepository
from app.features.database.repositories.users import UsersRepository

logger = logging.getLogger("Insights.Database")


class DatabaseClient:
    """
    Unified database client providing access to all repositories.

    Usage:
        db = get_database_client()
        journals = db.journals.find_by_user_and_date_range(user_id, start, end)
        insight = db.insights.find_one(user_id, week_start)
    """

    def __init__(self, client=None):
        """Initialize with all repositories; defaults to the shared Supabase client."""
        self._client = client if client is not None else get_supabase()

        self.journals = JournalsRepository(self._client)
        self.goals = GoalsRepository(self._client)
        self.users = UsersRepository(self._client)
        self.insights = InsightsRepository(self._client)

        logger.info("Database client initialized with all repositories")

    @property
    def client(self):
        """Direct access to Supabase client for advanced queries."""
        return self._client


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    """Get the singleton database client."""
    return DatabaseClient()
