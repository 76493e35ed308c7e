# Shared constants and utilities
from .constants import (
    INSIGHT_GOAL_STATUSES,
    MAX_REFLECTION_ITEMS,
    MIN_REFLECTION_ITEMS,
)

__all__ = [
    "INSIGHT_GOAL_STATUSES",
    "MAX_REFLECTION_ITEMS",
    "MIN_REFLECTION_ITEMS",
]
