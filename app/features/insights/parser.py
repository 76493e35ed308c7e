"""
Validation of the model's weekly insight output.

The model's reply is treated like an untrusted wire message: it is parsed
into a strict schema and rejected outright on any shape violation. No
truncation, padding or repair happens here; the only lenient step (dropping
unknown goal IDs) belongs to the engine, which knows the user's goals.
"""

import json
import logging
import re
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationError

from app.core.logging_utils import sanitize_for_logging
from app.features.insights.models import GoalAlignment
from app.shared.constants import (
    FIELD_EXPLANATION,
    FIELD_GOAL_ID,
    FIELD_GOAL_SUMMARIES,
    FIELD_REFLECTION,
    FIELD_STATUS,
    FIELD_SUGGESTION,
    MAX_REFLECTION_ITEMS,
    MIN_REFLECTION_ITEMS,
)
from app.shared.errors import MalformedAIResponse

logger = logging.getLogger("Insights.Parser")

_Text = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]
# Goal IDs must match the goal list exactly, so no whitespace is stripped
_GoalId = Annotated[str, StringConstraints(strict=True, min_length=1)]

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*\n?", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\n?```$")


class ParsedGoalSummary(BaseModel):
    # Extra keys (e.g. a model-supplied goalTitle) are ignored
    model_config = ConfigDict(extra="ignore")

    goal_id: _GoalId = Field(alias=FIELD_GOAL_ID)
    status: GoalAlignment = Field(alias=FIELD_STATUS)
    explanation: _Text = Field(alias=FIELD_EXPLANATION)


class ParsedInsight(BaseModel):
    model_config = ConfigDict(extra="ignore")

    reflection: List[_Text] = Field(
        alias=FIELD_REFLECTION,
        min_length=MIN_REFLECTION_ITEMS,
        max_length=MAX_REFLECTION_ITEMS,
    )
    goal_summaries: List[ParsedGoalSummary] = Field(alias=FIELD_GOAL_SUMMARIES)
    suggestion: Optional[str] = Field(default=None, alias=FIELD_SUGGESTION)


def strip_code_fence(raw_text: str) -> str:
    """Remove an optional ``` or ```json wrapper around the payload."""
    text = raw_text.strip()
    if text.startswith("```"):
        text = _FENCE_OPEN.sub("", text)
        text = _FENCE_CLOSE.sub("", text)
    return text.strip()


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return f"{location}: {first.get('msg', 'invalid')}"


def parse_insight_response(raw_text: str) -> ParsedInsight:
    """
    Parse and validate the model's reply.

    Raises:
        MalformedAIResponse: not JSON, not an object, reflection length outside
            4-6, goalSummaries not a list, or any summary with a missing or
            invalid field.
    """
    text = strip_code_fence(raw_text or "")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.error(
            "AI response is not valid JSON: %s | snippet=%s",
            exc,
            sanitize_for_logging(text, max_len=200),
        )
        raise MalformedAIResponse("response is not valid JSON") from exc

    if not isinstance(payload, dict):
        raise MalformedAIResponse("response is not a JSON object")

    try:
        return ParsedInsight.model_validate(payload)
    except ValidationError as exc:
        reason = _describe(exc)
        logger.error("AI response violates the insight contract: %s", reason)
        raise MalformedAIResponse(reason) from exc
