"""
==============================================================================
WEEKLY INSIGHT ENGINE
==============================================================================

Generates one AI-written insight per user per calendar week:

1. Resolve the week key to its Monday-Sunday window
2. Return the stored insight when it was produced by the current logic version
3. Otherwise gather the week's journals, the user's goals and profile
4. Prompt the model and validate its JSON reply against the output contract
5. Keep only goal summaries that reference the user's real goals
6. Upsert the record for (user, week) and return it

Collaborators (stores and the completion client) are passed in, so the
engine can run against Supabase in production and in-memory fakes in tests.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Dict, List, Optional, Tuple

from app.core.config import settings
from app.core.tracing import get_tracer
from app.features.insights.base import CompletionClient, GoalStore, InsightStore, JournalStore, UserStore
from app.features.insights.models import Goal, GoalSummary, WeeklyInsight
from app.features.insights.parser import ParsedGoalSummary, parse_insight_response
from app.features.insights.prompts import build_insight_prompt
from app.services.llm import AIClientError
from app.shared.constants import INSIGHT_GOAL_STATUSES
from app.shared.dates import format_date_key, week_window
from app.shared.errors import AIGenerationFailed, UserNotFound

logger = logging.getLogger("Insights.Engine")
tracer = get_tracer(__name__)

_LockKey = Tuple[str, str]


def cross_reference_goals(
    summaries: List[ParsedGoalSummary],
    goals: List[Goal],
) -> List[GoalSummary]:
    """
    Keep summaries whose goalId is one of `goals`, titled from the goal record.

    Unknown IDs are dropped with a warning rather than failing the insight.
    """
    goals_by_id = {goal.id: goal for goal in goals}
    matched: List[GoalSummary] = []

    for summary in summaries:
        goal = goals_by_id.get(summary.goal_id)
        if goal is None:
            logger.warning("Goal ID %s not found in user's goals, skipping", summary.goal_id)
            continue
        matched.append(
            GoalSummary(
                goal_id=goal.id,
                goal_title=goal.title,
                status=summary.status,
                explanation=summary.explanation,
            )
        )

    return matched


class InsightService:
    """Cached, versioned weekly insight generation."""

    def __init__(
        self,
        journals: JournalStore,
        goals: GoalStore,
        users: UserStore,
        insights: InsightStore,
        ai_client: CompletionClient,
        source_version: Optional[int] = None,
    ) -> None:
        self.journals = journals
        self.goals = goals
        self.users = users
        self.insights = insights
        self.ai_client = ai_client
        self.source_version = source_version if source_version is not None else settings.INSIGHT_SOURCE_VERSION

        self._locks: Dict[_LockKey, asyncio.Lock] = {}
        self._lock_holders: Dict[_LockKey, int] = {}

    @asynccontextmanager
    async def _generation_lock(self, key: _LockKey) -> AsyncIterator[None]:
        """At most one generation in flight per (user, week) in this process."""
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._lock_holders[key] = self._lock_holders.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_holders[key] -= 1
            if not self._lock_holders[key]:
                del self._lock_holders[key]
                del self._locks[key]

    async def get_insight(self, user_id: str, week_start_key: str) -> Optional[WeeklyInsight]:
        """Stored insight for the week, or None. Never generates."""
        week_start, _ = week_window(week_start_key)
        return self.insights.find_one(user_id, week_start)

    async def generate_insight(self, user_id: str, week_start_key: str) -> WeeklyInsight:
        """
        Return the week's insight, generating it when missing or stale.

        Raises:
            InvalidDateFormat: bad key (before any store access)
            UserNotFound: no profile for user_id
            AIGenerationFailed: the completion call failed
            MalformedAIResponse: the reply violates the output contract
        """
        week_start, week_end = week_window(week_start_key)
        week_key = format_date_key(week_start)

        async with self._generation_lock((user_id, week_key)):
            existing = self.insights.find_one(user_id, week_start)
            if existing is not None and existing.source_version == self.source_version:
                logger.info("Returning cached insight for user %s, week %s", user_id, week_key)
                return existing

            with tracer.start_as_current_span("insights.generate") as span:
                span.set_attribute("insights.week_start", week_key)
                span.set_attribute("insights.cache_state", "stale" if existing else "miss")
                insight = await self._generate(user_id, week_start, week_end)
                span.set_attribute("insights.journal_count", insight.journal_count)
                return insight

    async def _generate(self, user_id: str, week_start: datetime, week_end: datetime) -> WeeklyInsight:
        week_key = format_date_key(week_start)
        logger.info("Generating new insight for user %s, week %s", user_id, week_key)

        journals = self.journals.find_by_user_and_date_range(user_id, week_start, week_end)
        goals = self.goals.find_by_user_and_statuses(user_id, INSIGHT_GOAL_STATUSES)
        user = self.users.find_by_id(user_id)
        if user is None:
            raise UserNotFound(user_id)

        prompt = build_insight_prompt(journals, goals, user, week_start, week_end)

        try:
            raw_response = await self.ai_client.complete(prompt)
        except AIClientError as exc:
            logger.error("AI call failed for user %s (%s): %s", user_id, exc.kind, exc)
            raise AIGenerationFailed(str(exc), kind=exc.kind) from exc
        except Exception as exc:
            logger.exception("Unexpected AI client failure for user %s", user_id)
            raise AIGenerationFailed(str(exc) or "Failed to call AI service") from exc

        parsed = parse_insight_response(raw_response)
        goal_summaries = cross_reference_goals(parsed.goal_summaries, goals)

        insight = self.insights.upsert(
            user_id,
            week_start,
            {
                "week_end": week_end,
                "journal_count": len(journals),
                "reflection": parsed.reflection,
                "goal_summaries": goal_summaries,
                "suggestion": parsed.suggestion,
                "generated_at": datetime.now(timezone.utc),
                "source_version": self.source_version,
            },
        )

        logger.info(
            "Insight generated for user %s, week %s: %s journals, %s/%s goal summaries kept",
            user_id,
            week_key,
            len(journals),
            len(goal_summaries),
            len(parsed.goal_summaries),
        )
        return insight

    async def invalidate_insight(self, user_id: str, week_start_key: str) -> None:
        """
        Mark the week's insight stale so the next generate_insight regenerates it.

        Best-effort: failures are logged and never raised.
        """
        try:
            week_start, _ = week_window(week_start_key)
            touched = self.insights.mark_stale(user_id, week_start, self.source_version - 1)
            if touched:
                logger.info("Invalidated insight for user %s, week %s", user_id, week_start_key)
            else:
                logger.debug("No insight to invalidate for user %s, week %s", user_id, week_start_key)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Error invalidating insight for user %s, week %s: %s", user_id, week_start_key, exc)
