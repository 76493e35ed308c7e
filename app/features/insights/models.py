"""Pydantic models for the weekly insight pipeline."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.shared.constants import MAX_REFLECTION_ITEMS, MIN_REFLECTION_ITEMS


class GoalAlignment(str, Enum):
    """How the week's journals relate to a goal (shown to the model in this order)."""
    ALIGNED = "aligned"
    PARTIALLY_ALIGNED = "partially_aligned"
    NEEDS_ADJUSTMENT = "needs_adjustment"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"
    ARCHIVED = "archived"


# =============================================================================
# SOURCE RECORDS (read from the journal, goal and user stores)
# =============================================================================

class JournalEntry(BaseModel):
    """One journal entry as rendered into the prompt."""
    id: str
    user_id: str
    date: datetime
    what_happened: Optional[str] = None
    wins: List[str] = Field(default_factory=list)
    challenges: List[str] = Field(default_factory=list)
    gratitude: List[str] = Field(default_factory=list)
    lessons_learned: Optional[str] = None
    mood_score: Optional[int] = None
    energy: Optional[int] = None


class Goal(BaseModel):
    id: str
    user_id: str
    title: str
    type: str
    category: str
    status: GoalStatus = GoalStatus.ACTIVE
    why: Optional[str] = None


class UserProfile(BaseModel):
    id: str
    name: Optional[str] = None
    current_role: Optional[str] = None
    life_phase: Optional[str] = None
    focus_areas: List[str] = Field(default_factory=list)


# =============================================================================
# STORED INSIGHT
# =============================================================================

class _CamelModel(BaseModel):
    """Snake-case in Python and storage, camelCase on the API."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GoalSummary(_CamelModel):
    goal_id: str
    goal_title: str
    status: GoalAlignment
    explanation: str


class WeeklyInsight(_CamelModel):
    """One generated insight per (user, week)."""
    user_id: str
    week_start: datetime
    week_end: datetime
    journal_count: int = 0
    reflection: List[str] = Field(
        min_length=MIN_REFLECTION_ITEMS,
        max_length=MAX_REFLECTION_ITEMS,
    )
    goal_summaries: List[GoalSummary] = Field(default_factory=list)
    suggestion: Optional[str] = None
    generated_at: datetime
    source_version: int = 1
