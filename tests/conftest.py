"""Shared fixtures: in-memory stores and a scripted completion client."""

import json
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

import pytest

from app.features.insights import InsightService, WeeklyInsight
from app.features.insights.models import Goal, JournalEntry, UserProfile


def utc(year: int, month: int, day: int, hour: int = 0) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def ai_reply(
    reflection_count: int = 5,
    goal_ids: Tuple[str, ...] = ("g1",),
    suggestion: str = "Protect one evening for rest.",
    fenced: bool = False,
) -> str:
    payload = {
        "reflection": [f"Observation {i}" for i in range(1, reflection_count + 1)],
        "goalSummaries": [
            {"goalId": goal_id, "status": "aligned", "explanation": f"Progress on {goal_id}."}
            for goal_id in goal_ids
        ],
        "suggestion": suggestion,
    }
    text = json.dumps(payload)
    return f"```json\n{text}\n```" if fenced else text


class FakeJournals:
    def __init__(self, entries: Optional[List[JournalEntry]] = None):
        self.entries = entries or []
        self.calls: List[tuple] = []

    def find_by_user_and_date_range(self, user_id, start, end):
        self.calls.append((user_id, start, end))
        end_exclusive = end + timedelta(days=1)
        return sorted(
            (e for e in self.entries if e.user_id == user_id and start <= e.date < end_exclusive),
            key=lambda e: e.date,
        )


class FakeGoals:
    def __init__(self, goals: Optional[List[Goal]] = None):
        self.goals = goals or []
        self.calls: List[tuple] = []

    def find_by_user_and_statuses(self, user_id, statuses):
        self.calls.append((user_id, frozenset(statuses)))
        return [g for g in self.goals if g.user_id == user_id and g.status.value in statuses]


class FakeUsers:
    def __init__(self, users: Optional[List[UserProfile]] = None):
        self.users = {u.id: u for u in users or []}
        self.calls: List[str] = []

    def find_by_id(self, user_id):
        self.calls.append(user_id)
        return self.users.get(user_id)


class FakeInsightStore:
    """Dict keyed by (user_id, week_start), mirroring the unique index."""

    def __init__(self):
        self.records: Dict[tuple, WeeklyInsight] = {}
        self.find_calls = 0
        self.upsert_calls = 0
        self.fail_on_mark_stale = False

    def find_one(self, user_id, week_start):
        self.find_calls += 1
        return self.records.get((user_id, week_start))

    def upsert(self, user_id, week_start, fields):
        self.upsert_calls += 1
        record = WeeklyInsight(user_id=user_id, week_start=week_start, **fields)
        self.records[(user_id, week_start)] = record
        return record

    def mark_stale(self, user_id, week_start, source_version):
        if self.fail_on_mark_stale:
            raise ConnectionError("database unavailable")
        record = self.records.get((user_id, week_start))
        if record is None:
            return False
        self.records[(user_id, week_start)] = record.model_copy(update={"source_version": source_version})
        return True

    @property
    def total_calls(self) -> int:
        return self.find_calls + self.upsert_calls


class FakeAIClient:
    """Returns scripted replies in order (the last one repeats) or raises."""

    def __init__(self, *replies, error: Optional[Exception] = None):
        self.replies = list(replies) or [ai_reply()]
        self.error = error
        self.prompts: List[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        index = min(len(self.prompts) - 1, len(self.replies) - 1)
        return self.replies[index]


@pytest.fixture
def journals():
    return FakeJournals([
        JournalEntry(id="j1", user_id="u1", date=utc(2024, 3, 4), what_happened="Started a new project",
                     wins=["Shipped the draft"], mood_score=7, energy=6),
        JournalEntry(id="j2", user_id="u1", date=utc(2024, 3, 6), challenges=["Slept badly"],
                     gratitude=["Supportive team"]),
        JournalEntry(id="j3", user_id="u1", date=utc(2024, 3, 10, 21), lessons_learned="Plan rest days"),
        # Outside the week and another user's entry
        JournalEntry(id="j4", user_id="u1", date=utc(2024, 3, 11), what_happened="Next week"),
        JournalEntry(id="j5", user_id="u2", date=utc(2024, 3, 5), what_happened="Not mine"),
    ])


@pytest.fixture
def goals():
    return FakeGoals([
        Goal(id="g1", user_id="u1", title="Run a half marathon", type="monthly", category="Health",
             status="active", why="Feel stronger"),
        Goal(id="g2", user_id="u1", title="Read 12 books", type="yearly", category="Learning",
             status="active"),
        Goal(id="g3", user_id="u1", title="Old archived goal", type="weekly", category="Personal",
             status="archived"),
    ])


@pytest.fixture
def users():
    return FakeUsers([
        UserProfile(id="u1", name="Sam", current_role="Engineer", life_phase="Working professional",
                    focus_areas=["Health", "Learning"]),
    ])


@pytest.fixture
def insight_store():
    return FakeInsightStore()


@pytest.fixture
def ai_client():
    return FakeAIClient()


@pytest.fixture
def service(journals, goals, users, insight_store, ai_client):
    return InsightService(
        journals=journals,
        goals=goals,
        users=users,
        insights=insight_store,
        ai_client=ai_client,
        source_version=1,
    )
