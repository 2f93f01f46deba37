# tests/test_calendar_grid.py

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, timezone

import pytest

from puptrack.core.calendar_grid import (
    combine_day_and_time,
    days_for_month,
    is_same_month,
    month_bounds,
    month_title,
    shift_month,
    weeks_for_month,
)


@pytest.mark.parametrize("first_weekday", range(7))
def test_grid_covers_every_month_day_once(first_weekday: int) -> None:
    for year in (2023, 2024, 2026):
        for month in range(1, 13):
            anchor = date(year, month, 15)
            days = days_for_month(anchor, first_weekday)

            assert len(days) % 7 == 0
            assert len(days) in (28, 35, 42)
            assert days[0].weekday() == first_weekday

            start, end = month_bounds(anchor)
            in_month = [d for d in days if start <= d < end]
            assert in_month == [start + timedelta(days=i) for i in range((end - start).days)]

            # strictly consecutive dates
            assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))


def test_february_2015_fits_in_four_weeks_from_sunday() -> None:
    # 1 Feb 2015 was a Sunday, 28 days long
    days = days_for_month(date(2015, 2, 10), calendar.SUNDAY)
    assert len(days) == 28
    assert days[0] == date(2015, 2, 1)
    assert days[-1] == date(2015, 2, 28)


def test_leading_and_trailing_padding() -> None:
    # October 2026 starts on a Thursday
    days = days_for_month(date(2026, 10, 1), calendar.SUNDAY)
    assert days[:4] == [date(2026, 9, 27), date(2026, 9, 28), date(2026, 9, 29), date(2026, 9, 30)]
    assert days[4] == date(2026, 10, 1)
    assert days[-1] == date(2026, 10, 31)
    assert len(days) == 35

    monday_first = days_for_month(date(2026, 10, 1), calendar.MONDAY)
    assert monday_first[0] == date(2026, 9, 28)
    assert monday_first[-1] == date(2026, 11, 1)


def test_six_week_month() -> None:
    # August 2026 starts on Saturday and has 31 days
    assert len(days_for_month(date(2026, 8, 1), calendar.SUNDAY)) == 42


def test_datetime_anchor_and_weeks() -> None:
    weeks = weeks_for_month(datetime(2026, 10, 19, 23, 0), calendar.SUNDAY)
    assert all(len(w) == 7 for w in weeks)
    assert date(2026, 10, 19) in weeks[3]


def test_invalid_first_weekday() -> None:
    with pytest.raises(ValueError):
        days_for_month(date(2026, 1, 1), 7)


def test_month_helpers() -> None:
    assert shift_month(date(2026, 12, 31), 1) == date(2027, 1, 1)
    assert shift_month(date(2026, 1, 31), -1) == date(2025, 12, 1)
    assert shift_month(date(2026, 3, 5), 0) == date(2026, 3, 1)
    assert month_bounds(date(2024, 2, 29)) == (date(2024, 2, 1), date(2024, 3, 1))
    assert is_same_month(date(2026, 10, 1), datetime(2026, 10, 31, 12))
    assert not is_same_month(date(2026, 10, 1), date(2025, 10, 1))
    assert month_title(date(2026, 10, 19)) == "October 2026"


def test_combine_day_and_time() -> None:
    tz = timezone(timedelta(hours=2))
    at = combine_day_and_time(date(2026, 10, 19), time(18, 45, 30), tz)
    assert at == datetime(2026, 10, 19, 18, 45, tzinfo=tz)

    noon = combine_day_and_time(date(2026, 10, 19), tz=tz)
    assert (noon.hour, noon.minute) == (12, 0)
