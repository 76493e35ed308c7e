#!/usr/bin/env python3
"""
Weekly Insight Sweep.

Generates last week's insight for every user with AI insights enabled.
Users that already have a current insight are served from cache, so the
sweep is safe to re-run. Meant to run every Monday via Cloud Scheduler.

Usage:
    python run_weekly_insights.py                         # last week, all eligible users
    python run_weekly_insights.py --week 2024-03-04       # a specific week
    python run_weekly_insights.py --user u1 --user u2     # only these users
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from app.core.config import settings
from app.shared.correlation import CorrelationContext
from app.shared.logging_config import setup_logging

logger = logging.getLogger("Insights.Sweep")


async def run_weekly_insights(week: Optional[str] = None, user_ids: Optional[List[str]] = None):
    from app.api.dependencies import get_insight_service
    from app.features.database import get_database_client
    from app.features.insights import generate_weekly_insights, previous_week_key

    week = week or previous_week_key()
    if not user_ids:
        user_ids = get_database_client().users.list_insight_recipients()

    logger.info(f"Generating insights for week {week} ({len(user_ids)} users)")
    return await generate_weekly_insights(get_insight_service(), user_ids, week)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate weekly insights")
    parser.add_argument("--week", help="Week start (YYYY-MM-DD); defaults to last week")
    parser.add_argument("--user", action="append", dest="users", help="Limit to this user ID (repeatable)")
    args = parser.parse_args()

    setup_logging(service_name=settings.SERVICE_NAME)

    with CorrelationContext("weekly-sweep"):
        summary = asyncio.run(run_weekly_insights(week=args.week, user_ids=args.users))

    print("\n" + "=" * 60)
    print(f"WEEKLY INSIGHTS: {summary.week_start}")
    print("=" * 60)
    print(f"Generated: {len(summary.generated)}")
    print(f"Failed: {len(summary.failed)}")
    for user_id, reason in summary.failed.items():
        print(f"  {user_id}: {reason}")

    sys.exit(1 if summary.failed and not summary.generated else 0)
