"""
Collaborator contracts for the insight engine.

InsightService depends only on these shapes. Production wires in the Supabase
repositories and ClaudeCompletionClient; tests pass in-memory fakes.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Protocol, runtime_checkable

from app.features.insights.models import Goal, JournalEntry, UserProfile, WeeklyInsight


@runtime_checkable
class JournalStore(Protocol):
    def find_by_user_and_date_range(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
    ) -> List[JournalEntry]:
        """Entries dated on any day in [start, end], oldest first."""
        ...


@runtime_checkable
class GoalStore(Protocol):
    def find_by_user_and_statuses(self, user_id: str, statuses: Iterable[str]) -> List[Goal]:
        ...


@runtime_checkable
class UserStore(Protocol):
    def find_by_id(self, user_id: str) -> Optional[UserProfile]:
        ...


@runtime_checkable
class InsightStore(Protocol):
    """One record per (user_id, week_start); upsert replaces it wholesale."""

    def find_one(self, user_id: str, week_start: datetime) -> Optional[WeeklyInsight]:
        ...

    def upsert(self, user_id: str, week_start: datetime, fields: Dict[str, Any]) -> WeeklyInsight:
        ...

    def mark_stale(self, user_id: str, week_start: datetime, source_version: int) -> bool:
        ...


@runtime_checkable
class CompletionClient(Protocol):
    async def complete(self, prompt: str) -> str:
        """Model text for `prompt`; failures raise AIClientError subclasses."""
        ...
