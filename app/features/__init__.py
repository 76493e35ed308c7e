"""
Features Module - Self-contained feature units.

Each feature is a modular unit with its own logic:
- insights: Weekly AI insights over journals and goals
- database: Supabase repositories for journals, goals, users and insights
"""

from app.features.database import get_database_client, DatabaseClient

__all__ = [
    "get_database_client",
    "DatabaseClient",
]
