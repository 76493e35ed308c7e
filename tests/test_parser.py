import json

import pytest

from app.features.insights.models import GoalAlignment
from app.features.insights.parser import parse_insight_response, strip_code_fence
from app.shared.errors import MalformedAIResponse

from conftest import ai_reply


def _payload(**overrides):
    payload = json.loads(ai_reply())
    payload.update(overrides)
    return json.dumps(payload)


def test_parses_valid_reply():
    parsed = parse_insight_response(ai_reply(reflection_count=4, goal_ids=("g1", "g2")))

    assert len(parsed.reflection) == 4
    assert [s.goal_id for s in parsed.goal_summaries] == ["g1", "g2"]
    assert parsed.goal_summaries[0].status is GoalAlignment.ALIGNED
    assert parsed.suggestion == "Protect one evening for rest."


def test_accepts_code_fenced_reply():
    parsed = parse_insight_response(ai_reply(fenced=True))
    assert len(parsed.reflection) == 5


def test_strip_code_fence_handles_bare_fence():
    assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'


@pytest.mark.parametrize("count", [0, 3, 7])
def test_rejects_reflection_outside_four_to_six(count):
    with pytest.raises(MalformedAIResponse):
        parse_insight_response(ai_reply(reflection_count=count))


@pytest.mark.parametrize("count", [4, 6])
def test_accepts_reflection_bounds(count):
    assert len(parse_insight_response(ai_reply(reflection_count=count)).reflection) == count


@pytest.mark.parametrize(
    "raw",
    [
        "Here is your insight!",
        "",
        "[1, 2, 3]",
        '"just a string"',
    ],
)
def test_rejects_non_object_replies(raw):
    with pytest.raises(MalformedAIResponse):
        parse_insight_response(raw)


def test_rejects_missing_goal_summaries():
    payload = json.loads(ai_reply())
    del payload["goalSummaries"]
    with pytest.raises(MalformedAIResponse):
        parse_insight_response(json.dumps(payload))


def test_rejects_goal_summaries_that_is_not_a_list():
    with pytest.raises(MalformedAIResponse):
        parse_insight_response(_payload(goalSummaries={"goalId": "g1"}))


@pytest.mark.parametrize(
    "summary",
    [
        {"status": "aligned", "explanation": "ok"},
        {"goalId": "g1", "status": "on_track", "explanation": "ok"},
        {"goalId": "g1", "status": "aligned"},
        {"goalId": "g1", "status": "aligned", "explanation": "   "},
        {"goalId": 7, "status": "aligned", "explanation": "ok"},
    ],
)
def test_rejects_invalid_goal_summary(summary):
    with pytest.raises(MalformedAIResponse):
        parse_insight_response(_payload(goalSummaries=[summary]))


def test_rejects_non_string_reflection_items():
    with pytest.raises(MalformedAIResponse):
        parse_insight_response(_payload(reflection=["a", "b", "c", 4]))


def test_missing_suggestion_is_allowed():
    payload = json.loads(ai_reply())
    del payload["suggestion"]
    assert parse_insight_response(json.dumps(payload)).suggestion is None


def test_extra_keys_are_ignored():
    summary = {"goalId": "g1", "goalTitle": "Made up", "status": "needs_adjustment", "explanation": "ok"}
    parsed = parse_insight_response(_payload(goalSummaries=[summary], mood="good"))
    assert parsed.goal_summaries[0].status is GoalAlignment.NEEDS_ADJUSTMENT


def test_goal_id_is_kept_verbatim():
    summary = {"goalId": "  g1 ", "status": "aligned", "explanation": "ok"}
    parsed = parse_insight_response(_payload(goalSummaries=[summary]))
    assert parsed.goal_summaries[0].goal_id == "  g1 "
