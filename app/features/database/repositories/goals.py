"""Goals Repository - read access to a user's goals."""

import logging
from typing import Iterable, List

from app.features.insights.models import Goal
from app.shared.constants import GOALS_TABLE

logger = logging.getLogger("Insights.Database.Goals")


class GoalsRepository:
    """Repository for goal operations."""

    def __init__(self, client):
        """Initialize with Supabase client."""
        self.client = client

    def find_by_user_and_statuses(self, user_id: str, statuses: Iterable[str]) -> List[Goal]:
        """Goals of `user_id` whose status is one of `statuses` (unordered)."""
        try:
            result = self.client.table(GOALS_TABLE).select("*").eq(
                "user_id", user_id
            ).in_(
                "status", sorted(statuses)
            ).execute()
        except Exception as e:
            logger.error(f"Error fetching goals for user {user_id}: {e}")
            raise

        return [Goal.model_validate(row) for row in result.data or []]
