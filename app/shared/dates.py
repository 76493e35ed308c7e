"""
Week and date-key helpers.

All functions are pure. Callers pass UTC-normalized datetimes; week_start and
week_end work on the value's own calendar date and keep its time-of-day.
"""

import re
from datetime import datetime, timedelta, timezone

from app.shared.errors import InvalidDateFormat

DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def week_start(value: datetime) -> datetime:
    """Return the Monday of the week containing `value`."""
    # isoweekday: Monday=1 .. Sunday=7, so Sunday backs up six days
    return value - timedelta(days=value.isoweekday() - 1)


def week_end(value: datetime) -> datetime:
    """Return the Sunday closing the week containing `value`."""
    return week_start(value) + timedelta(days=6)


def normalize_date(value: datetime) -> datetime:
    """Truncate to 00:00:00.000 UTC. Naive datetimes are treated as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def parse_date_key(text: str) -> datetime:
    """Parse a strict YYYY-MM-DD key as UTC midnight."""
    if not isinstance(text, str) or not DATE_KEY_PATTERN.match(text):
        raise InvalidDateFormat(text)
    try:
        parsed = datetime.strptime(text, "%Y-%m-%d")
    except ValueError as exc:
        # Right shape, impossible date (e.g. 2024-02-30)
        raise InvalidDateFormat(text) from exc
    return parsed.replace(tzinfo=timezone.utc)


def format_date_key(value: datetime) -> str:
    """Render a datetime as its YYYY-MM-DD key."""
    return value.strftime("%Y-%m-%d")


def week_window(week_start_key: str) -> tuple[datetime, datetime]:
    """
    Resolve a week key into its normalized (Monday, Sunday) window.

    A valid key that is not a Monday is snapped back to its week's Monday.
    """
    start = normalize_date(week_start(parse_date_key(week_start_key)))
    return start, normalize_date(week_end(start))
