"""
Tests for `domain/month_range.py`.

Covers contract rules:
- start is the first instant of the month, end is start plus one calendar month.
- Every instant inside the month satisfies start <= t < end.
- Leap-year February and December year rollover are handled.
- Malformed tokens raise InvalidMonth.
"""

from __future__ import annotations

import calendar
from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from domain.month_range import InvalidMonth, MonthRange


@pytest.mark.parametrize("month", range(1, 13))
def test_month_range_spans_exactly_one_calendar_month(month: int) -> None:
    """Verify start/end and membership for every month of a common year."""

    r = MonthRange.parse(f"2023-{month:02d}")
    days = calendar.monthrange(2023, month)[1]

    assert r.start == datetime(2023, month, 1, tzinfo=timezone.utc)
    assert r.end - r.start == timedelta(days=days)
    assert r.start < r.end

    first = r.start
    last = datetime(2023, month, days, 23, 59, 59, 999999, tzinfo=timezone.utc)
    assert r.contains(first)
    assert r.contains(last)
    assert not r.contains(r.end)
    assert not r.contains(first - timedelta(microseconds=1))


def test_month_range_leap_year_february() -> None:
    """Verify February 2024 has 29 days and February 2023 has 28."""

    leap = MonthRange.parse("2024-02")
    common = MonthRange.parse("2023-02")

    assert leap.end == datetime(2024, 3, 1, tzinfo=timezone.utc)
    assert leap.end - leap.start == timedelta(days=29)
    assert leap.contains(datetime(2024, 2, 29, 12, tzinfo=timezone.utc))

    assert common.end - common.start == timedelta(days=28)


def test_month_range_december_rolls_into_next_year() -> None:
    """Verify December ends at January 1 of the following year."""

    r = MonthRange.parse("2024-12")
    assert r.end == datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_month_range_uses_reporting_timezone() -> None:
    """Verify the month boundaries follow the given calendar timezone."""

    tz = ZoneInfo("America/New_York")
    r = MonthRange.parse("2024-03", tz)

    assert r.start == datetime(2024, 3, 1, 5, tzinfo=timezone.utc)
    # DST starts in March, so April 1 local midnight is 04:00 UTC
    assert r.end == datetime(2024, 4, 1, 4, tzinfo=timezone.utc)
    assert not r.contains(datetime(2024, 3, 1, 4, 59, tzinfo=timezone.utc))


def test_month_range_token_round_trips() -> None:
    assert MonthRange.parse("1999-07").token == "1999-07"


@pytest.mark.parametrize("past_or_future", ["1970-01", "2099-11"])
def test_month_range_accepts_past_and_future_months(past_or_future: str) -> None:
    MonthRange.parse(past_or_future)


@pytest.mark.parametrize(
    "token",
    [
        "",
        "2024",
        "2024-13",
        "2024-00",
        "2024-3",
        "24-03",
        "2024/03",
        "abcd-ef",
        "2024-03-01",
        "0000-01",
        "9999-12",
        "٢٠٢٤-٠٣",  # Arabic-Indic digits
        "２０２４-０３",  # fullwidth digits
    ],
)
def test_month_range_rejects_malformed_tokens(token: str) -> None:
    """Verify wrong format, non-ASCII digits, out-of-range months and unrepresentable years raise InvalidMonth."""

    with pytest.raises(InvalidMonth):
        MonthRange.parse(token)


def test_month_range_rejects_month_outside_utc_range() -> None:
    """Verify a month whose start falls before year 1 in UTC is rejected."""

    assert MonthRange.parse("0001-01").start == datetime(1, 1, 1, tzinfo=timezone.utc)

    with pytest.raises(InvalidMonth):
        MonthRange.parse("0001-01", timezone(timedelta(hours=14)))


def test_invalid_month_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        MonthRange.parse("2024-13")


def test_month_range_is_immutable() -> None:
    r = MonthRange.parse("2024-03")
    with pytest.raises(FrozenInstanceError):
        r.start = datetime(2024, 4, 1, tzinfo=timezone.utc)  # type: ignore[misc]
