"""
Weekly insights feature module.

This module provides the AI-powered weekly insight pipeline:
- Cached, versioned generation per (user, week)
- Prompt building and strict validation of the model's reply
- Batch generation for the weekly sweep
"""

from app.features.insights.batch import BatchSummary, generate_weekly_insights, previous_week_key
from app.features.insights.models import GoalAlignment, GoalSummary, WeeklyInsight
from app.features.insights.service import InsightService

__all__ = [
    "InsightService",
    "WeeklyInsight",
    "GoalSummary",
    "GoalAlignment",
    "BatchSummary",
    "generate_weekly_insights",
    "previous_week_key",
]
