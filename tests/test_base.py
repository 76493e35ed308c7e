from unittest.mock import MagicMock

import pytest

from app.features.database import DatabaseClient
from app.features.insights.base import CompletionClient, GoalStore, InsightStore, JournalStore, UserStore
from app.services.llm import ClaudeCompletionClient

from conftest import FakeAIClient, FakeGoals, FakeInsightStore, FakeJournals, FakeUsers


@pytest.fixture
def db():
    return DatabaseClient(MagicMock())


def test_supabase_repositories_satisfy_store_contracts(db):
    assert isinstance(db.journals, JournalStore)
    assert isinstance(db.goals, GoalStore)
    assert isinstance(db.users, UserStore)
    assert isinstance(db.insights, InsightStore)


def test_claude_client_satisfies_completion_contract():
    client = ClaudeCompletionClient(models=["primary-model"], client=MagicMock())
    assert isinstance(client, CompletionClient)


def test_in_memory_fakes_satisfy_the_same_contracts():
    assert isinstance(FakeJournals(), JournalStore)
    assert isinstance(FakeGoals(), GoalStore)
    assert isinstance(FakeUsers(), UserStore)
    assert isinstance(FakeInsightStore(), InsightStore)
    assert isinstance(FakeAIClient(), CompletionClient)


def test_store_missing_an_operation_is_rejected():
    class ReadOnlyInsights:
        def find_one(self, user_id, week_start):
            return None

    assert not isinstance(ReadOnlyInsights(), InsightStore)
