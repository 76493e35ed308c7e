"""
Weekly insight sweep.

Generates last week's insight for many users in one run. Each user is
processed independently: a failure for one user is logged and counted, and
the sweep moves on to the next.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from app.shared.dates import format_date_key, normalize_date, week_start
from app.shared.errors import InsightError

logger = logging.getLogger("Insights.Batch")


@dataclass
class BatchSummary:
    week_start: str
    generated: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.generated) + len(self.failed)


def previous_week_key(today: Optional[date] = None) -> str:
    """Monday key of the last complete week before `today`."""
    if today is None:
        today = datetime.now(timezone.utc).date()
    current = datetime(today.year, today.month, today.day, tzinfo=timezone.utc)
    return format_date_key(normalize_date(week_start(current) - timedelta(days=7)))


async def generate_weekly_insights(
    service,
    user_ids: Iterable[str],
    week_start_key: str,
) -> BatchSummary:
    """Generate (or reuse cached) insights for each user, isolating failures."""
    summary = BatchSummary(week_start=week_start_key)

    for user_id in user_ids:
        try:
            await service.generate_insight(user_id, week_start_key)
            summary.generated.append(user_id)
        except InsightError as exc:
            logger.warning("Insight not generated for user %s: %s", user_id, exc.message)
            summary.failed[user_id] = exc.message
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Error processing user %s: %s", user_id, exc, exc_info=True)
            summary.failed[user_id] = str(exc) or exc.__class__.__name__

    logger.info(
        "Weekly insight sweep completed: %s generated, %s failed",
        len(summary.generated),
        len(summary.failed),
        extra={"week": week_start_key},
    )
    return summary
