"""
Shared constants for the insight pipeline.

The prompt builder and the response parser both read the output contract
from here, so the field names cannot drift apart. The status values live in
the GoalAlignment enum (app.features.insights.models), which both use too.
"""

# Output contract field names (as the model must emit them)
FIELD_REFLECTION = "reflection"
FIELD_GOAL_SUMMARIES = "goalSummaries"
FIELD_GOAL_ID = "goalId"
FIELD_STATUS = "status"
FIELD_EXPLANATION = "explanation"
FIELD_SUGGESTION = "suggestion"

# Reflection bullet bounds (inclusive)
MIN_REFLECTION_ITEMS = 4
MAX_REFLECTION_ITEMS = 6

# Goal statuses that feed an insight (archived goals are excluded)
INSIGHT_GOAL_STATUSES = frozenset({"active", "completed", "paused"})

# Per-field character cap for journal text rendered into the prompt
MAX_PROMPT_FIELD_CHARS = 300

# Storage
WEEKLY_INSIGHTS_TABLE = "weekly_insights"
JOURNALS_TABLE = "journals"
GOALS_TABLE = "goals"
USERS_TABLE = "users"
