from datetime import datetime, timedelta, timezone

import pytest

from app.shared.dates import (
    format_date_key,
    normalize_date,
    parse_date_key,
    week_end,
    week_start,
    week_window,
)
from app.shared.errors import InvalidDateFormat


def test_week_start_is_monday_for_every_weekday():
    monday = datetime(2024, 3, 4, tzinfo=timezone.utc)
    for offset in range(7):
        day = monday + timedelta(days=offset)
        assert week_start(day) == monday
        assert week_start(day).isoweekday() == 1


def test_sunday_belongs_to_the_preceding_monday():
    sunday = datetime(2024, 3, 10, tzinfo=timezone.utc)
    assert week_start(sunday) == datetime(2024, 3, 4, tzinfo=timezone.utc)


def test_week_start_is_idempotent_and_week_end_is_six_days_later():
    start = datetime(2023, 12, 25, tzinfo=timezone.utc)
    for offset in range(60):
        day = start + timedelta(days=offset, hours=offset % 24)
        ws = week_start(day)
        assert week_start(ws) == ws
        assert week_end(day) == ws + timedelta(days=6)
        assert week_end(day).isoweekday() == 7


def test_week_start_crosses_month_and_year_boundaries():
    assert week_start(datetime(2024, 1, 3)) == datetime(2024, 1, 1)
    assert week_start(datetime(2021, 1, 2)) == datetime(2020, 12, 28)


def test_normalize_date_truncates_to_utc_midnight():
    value = datetime(2024, 3, 6, 17, 45, 12, 999, tzinfo=timezone.utc)
    assert normalize_date(value) == datetime(2024, 3, 6, tzinfo=timezone.utc)


def test_normalize_date_converts_aware_values_and_assumes_utc_for_naive():
    plus_ten = timezone(timedelta(hours=10))
    assert normalize_date(datetime(2024, 3, 7, 5, tzinfo=plus_ten)) == datetime(2024, 3, 6, tzinfo=timezone.utc)
    assert normalize_date(datetime(2024, 3, 6, 23)) == datetime(2024, 3, 6, tzinfo=timezone.utc)


def test_parse_date_key_returns_utc_midnight():
    parsed = parse_date_key("2024-03-04")
    assert parsed == datetime(2024, 3, 4, tzinfo=timezone.utc)
    assert parse_date_key("2024-03-04") == parsed
    assert format_date_key(parsed) == "2024-03-04"


@pytest.mark.parametrize("bad_key", ["2024-3-4", "2024/03/04", "20240304", "2024-03-04T00:00:00", "", " 2024-03-04", "2024-02-30"])
def test_parse_date_key_rejects_other_shapes(bad_key):
    with pytest.raises(InvalidDateFormat):
        parse_date_key(bad_key)


def test_parse_date_key_rejects_non_strings():
    with pytest.raises(InvalidDateFormat):
        parse_date_key(None)


def test_week_window_snaps_to_monday():
    start, end = week_window("2024-03-07")
    assert start == datetime(2024, 3, 4, tzinfo=timezone.utc)
    assert end == datetime(2024, 3, 10, tzinfo=timezone.utc)
