"""
Users Repository - profile lookups for insight generation.

Provides:
- The profile fields the insight prompt uses (name, role, life phase, focus areas)
- The list of users the weekly sweep generates insights for
"""

import logging
from typing import List, Optional

from app.features.insights.models import UserProfile
from app.shared.constants import USERS_TABLE

logger = logging.getLogger("Insights.Database.Users")

PROFILE_COLUMNS = "id, name, current_role, life_phase, focus_areas"


class UsersRepository:
    """Repository for user profile operations."""

    def __init__(self, client):
        """Initialize with Supabase client."""
        self.client = client

    def find_by_id(self, user_id: str) -> Optional[UserProfile]:
        """Get an active user's profile, or None."""
        try:
            result = self.client.table(USERS_TABLE).select(PROFILE_COLUMNS).eq(
                "id", user_id
            ).is_("deleted_at", "null").execute()
        except Exception as e:
            logger.error(f"Error fetching user {user_id}: {e}")
            raise

        return UserProfile.model_validate(result.data[0]) if result.data else None

    def list_insight_recipients(self) -> List[str]:
        """IDs of users with a completed profile and AI insights enabled."""
        try:
            result = self.client.table(USERS_TABLE).select("id").eq(
                "is_profile_completed", True
            ).eq(
                "ai_enabled", True
            ).is_("deleted_at", "null").execute()
        except Exception as e:
            logger.error(f"Error listing insight recipients: {e}")
            raise

        user_ids = [row["id"] for row in result.data or []]
        logger.info(f"Found {len(user_ids)} users eligible for weekly insights")
        return user_ids
