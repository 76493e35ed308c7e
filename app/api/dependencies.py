from functools import lru_cache

from app.features.database import get_database_client
from app.features.insights import InsightService
from app.services.llm import ClaudeCompletionClient


@lru_cache(maxsize=1)
def get_ai_client() -> ClaudeCompletionClient:
    """Provide a singleton Claude completion client for request handlers."""
    return ClaudeCompletionClient()


@lru_cache(maxsize=1)
def get_insight_service() -> InsightService:
    """Provide the insight engine wired to Supabase and Claude."""
    db = get_database_client()
    return InsightService(
        journals=db.journals,
        goals=db.goals,
        users=db.users,
        insights=db.insights,
        ai_client=get_ai_client(),
    )
