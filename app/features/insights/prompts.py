"""
Prompt construction for weekly insights.

The prompt has three parts: the week's context (dates and user profile), the
journals and goals rendered as numbered lists, and the output contract the
model must follow. The contract's field names come from app.shared.constants
and its status values from the GoalAlignment enum, the same sources the
parser validates against.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from app.features.insights.models import Goal, GoalAlignment, JournalEntry, UserProfile
from app.shared.constants import (
    FIELD_EXPLANATION,
    FIELD_GOAL_ID,
    FIELD_GOAL_SUMMARIES,
    FIELD_REFLECTION,
    FIELD_STATUS,
    FIELD_SUGGESTION,
    MAX_PROMPT_FIELD_CHARS,
    MAX_REFLECTION_ITEMS,
    MIN_REFLECTION_ITEMS,
)
from app.shared.dates import format_date_key


def _clip(text: str, limit: int = MAX_PROMPT_FIELD_CHARS) -> str:
    return text[:limit]


def _join(items: Sequence[str]) -> Optional[str]:
    values = [item for item in items if item]
    if not values:
        return None
    return _clip(", ".join(values))


def build_profile_context(user: UserProfile, week_start: datetime, week_end: datetime) -> str:
    lines = [
        f"Week: {format_date_key(week_start)} to {format_date_key(week_end)}",
        f"User: {user.name or 'User'}",
    ]
    if user.current_role:
        lines.append(f"Role: {user.current_role}")
    if user.life_phase:
        lines.append(f"Life Phase: {user.life_phase}")
    if user.focus_areas:
        lines.append(f"Focus Areas: {', '.join(user.focus_areas)}")
    return "\n".join(lines)


def render_journal(index: int, journal: JournalEntry) -> str:
    """Render one entry; every free-text field is capped at 300 characters."""
    lines = [f"[{index}] {format_date_key(journal.date)}:"]

    if journal.what_happened:
        lines.append(f"What Happened: {_clip(journal.what_happened)}")

    wins = _join(journal.wins)
    if wins:
        lines.append(f"Wins: {wins}")

    challenges = _join(journal.challenges)
    if challenges:
        lines.append(f"Challenges: {challenges}")

    gratitude = _join(journal.gratitude)
    if gratitude:
        lines.append(f"Gratitude: {gratitude}")

    if journal.lessons_learned:
        lines.append(f"Lessons Learned: {_clip(journal.lessons_learned)}")

    if journal.mood_score:
        lines.append(f"Mood Score: {journal.mood_score}/10")
    if journal.energy:
        lines.append(f"Energy Level: {journal.energy}/10")

    return "\n".join(lines)


def render_goal(index: int, goal: Goal) -> str:
    lines = [
        f"[{index}] ID: {goal.id}",
        f"Title: {goal.title}",
        f"Type: {goal.type}, Status: {goal.status.value}",
        f"Category: {goal.category}",
    ]
    if goal.why:
        lines.append(f"Why: {goal.why}")
    return "\n".join(lines)


def build_journals_section(journals: List[JournalEntry]) -> str:
    header = f"JOURNALS THIS WEEK ({len(journals)}):"
    if not journals:
        return f"{header}\nNo journal entries this week."
    rendered = [render_journal(i, journal) for i, journal in enumerate(journals, start=1)]
    return header + "\n\n" + "\n\n".join(rendered)


def build_goals_section(goals: List[Goal]) -> str:
    header = "ACTIVE GOALS:"
    if not goals:
        return f"{header}\nNo active goals."
    rendered = [render_goal(i, goal) for i, goal in enumerate(goals, start=1)]
    return header + "\n\n" + "\n\n".join(rendered)


def build_output_contract(example_goal_id: Optional[str] = None) -> str:
    """The JSON shape the parser accepts, plus writing guidelines."""
    statuses = " | ".join(status.value for status in GoalAlignment)
    example_id = example_goal_id or "67775f1e8a2b3c4d5e6f7890"

    return f"""Please provide a weekly insight in STRICT JSON format:

{{
  "{FIELD_REFLECTION}": [
    "{MIN_REFLECTION_ITEMS}-{MAX_REFLECTION_ITEMS} thoughtful bullet points about this week's journaling patterns, emotions, or themes"
  ],
  "{FIELD_GOAL_SUMMARIES}": [
    {{
      "{FIELD_GOAL_ID}": "USE THE EXACT ID FROM THE GOALS LIST ABOVE",
      "{FIELD_STATUS}": "{statuses}",
      "{FIELD_EXPLANATION}": "brief explanation of how journals relate to this goal"
    }}
  ],
  "{FIELD_SUGGESTION}": "ONE gentle, actionable suggestion for next week"
}}

Guidelines:
- "{FIELD_REFLECTION}" must contain between {MIN_REFLECTION_ITEMS} and {MAX_REFLECTION_ITEMS} items
- Be warm, encouraging, and specific
- Reference actual journal content when possible
- Keep explanations concise (1-2 sentences)
- Suggestion should be practical and achievable
- For {FIELD_GOAL_SUMMARIES}, use the EXACT goal ID from the list above (e.g., "{example_id}")
- "{FIELD_STATUS}" must be one of: {statuses}
- Only include goals that are actually mentioned or related to the journal entries
- Return ONLY valid JSON, no additional text"""


def build_insight_prompt(
    journals: List[JournalEntry],
    goals: List[Goal],
    user: UserProfile,
    week_start: datetime,
    week_end: datetime,
) -> str:
    """Build the full weekly insight prompt. Deterministic for equal inputs."""
    intro = (
        "You are a thoughtful journaling coach integrated in a journaling app, "
        "providing weekly insights and meaningful suggestions to the user. "
        "The journaling page asks the questions reflected in the entries below."
    )

    return "\n\n".join([
        intro,
        build_profile_context(user, week_start, week_end),
        build_journals_section(journals),
        build_goals_section(goals),
        "---",
        build_output_contract(goals[0].id if goals else None),
    ]) + "\n"
