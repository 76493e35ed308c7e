"""
Insights Repository - one weekly insight per (user, week).

The weekly_insights table has a unique index on (user_id, week_start), so
upsert() overwrites the week's record in place and repeated or concurrent
writes for the same key always leave exactly one row.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from app.features.insights.models import WeeklyInsight
from app.shared.constants import WEEKLY_INSIGHTS_TABLE

logger = logging.getLogger("Insights.Database.Insights")

UNIQUE_KEY = "user_id,week_start"


def _to_row(user_id: str, week_start: datetime, fields: Dict[str, Any]) -> Dict[str, Any]:
    row = {"user_id": user_id, "week_start": week_start.isoformat()}
    for key, value in fields.items():
        if isinstance(value, datetime):
            value = value.isoformat()
        elif key == "goal_summaries":
            value = [
                summary.model_dump(mode="json") if hasattr(summary, "model_dump") else summary
                for summary in value
            ]
        row[key] = value
    return row


class InsightsRepository:
    """Repository for weekly insight records."""

    def __init__(self, client):
        """Initialize with Supabase client."""
        self.client = client

    def find_one(self, user_id: str, week_start: datetime) -> Optional[WeeklyInsight]:
        """Get the insight stored for this exact week start, or None."""
        try:
            result = self.client.table(WEEKLY_INSIGHTS_TABLE).select("*").eq(
                "user_id", user_id
            ).eq(
                "week_start", week_start.isoformat()
            ).limit(1).execute()
        except Exception as e:
            logger.error(f"Error fetching insight for user {user_id}: {e}")
            raise

        return WeeklyInsight.model_validate(result.data[0]) if result.data else None

    def upsert(self, user_id: str, week_start: datetime, fields: Dict[str, Any]) -> WeeklyInsight:
        """Create or wholesale-replace the week's insight and return it."""
        payload = _to_row(user_id, week_start, fields)
        try:
            result = self.client.table(WEEKLY_INSIGHTS_TABLE).upsert(
                payload, on_conflict=UNIQUE_KEY
            ).execute()
        except Exception as e:
            logger.error(f"Error upserting insight for user {user_id}: {e}")
            raise

        row = result.data[0] if result.data else payload
        logger.info(f"Insight saved for user {user_id}, week {payload['week_start'][:10]}")
        return WeeklyInsight.model_validate(row)

    def mark_stale(self, user_id: str, week_start: datetime, source_version: int) -> bool:
        """Overwrite only source_version. Returns False when no row exists."""
        result = self.client.table(WEEKLY_INSIGHTS_TABLE).update(
            {"source_version": source_version}
        ).eq(
            "user_id", user_id
        ).eq(
            "week_start", week_start.isoformat()
        ).execute()
        return bool(result.data)
