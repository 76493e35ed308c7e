"""
Journals Repository - read access to journal entries.

Journal entries are created and edited by the journaling API; the insight
pipeline only reads them by user and week window.
"""

import logging
from datetime import datetime, timedelta
from typing import List

from app.features.insights.models import JournalEntry
from app.shared.constants import JOURNALS_TABLE

logger = logging.getLogger("Insights.Database.Journals")


class JournalsRepository:
    """Repository for journal operations."""

    def __init__(self, client):
        """Initialize with Supabase client."""
        self.client = client

    def find_by_user_and_date_range(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
    ) -> List[JournalEntry]:
        """
        Entries dated within [start, end], both calendar days inclusive,
        oldest first. Soft-deleted entries are skipped.
        """
        end_exclusive = end + timedelta(days=1)
        try:
            result = self.client.table(JOURNALS_TABLE).select("*").eq(
                "user_id", user_id
            ).gte(
                "date", start.isoformat()
            ).lt(
                "date", end_exclusive.isoformat()
            ).is_(
                "deleted_at", "null"
            ).order("date").execute()
        except Exception as e:
            logger.error(f"Error fetching journals for user {user_id}: {e}")
            raise

        journals = [JournalEntry.model_validate(row) for row in result.data or []]
        logger.debug(f"Fetched {len(journals)} journals for user {user_id}")
        return journals
