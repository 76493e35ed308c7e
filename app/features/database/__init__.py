"""
Database Feature Module - Organized Data Access Layer

Provides access to the Supabase tables the insight pipeline reads and writes.

Usage:
    from app.features.database import get_database_client

    db = get_database_client()
    goals = db.goals.find_by_user_and_statuses(user_id, {"active"})
    insight = db.insights.find_one(user_id, week_start)
"""

from app.features.database.client import DatabaseClient, get_database_client

__all__ = [
    "DatabaseClient",
    "get_database_client",
]
