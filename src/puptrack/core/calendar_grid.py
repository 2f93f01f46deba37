# src/puptrack/core/calendar_grid.py

"""
Month-page date arithmetic.

Weekdays follow Python's `calendar` convention: 0=Monday ... 6=Sunday.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, tzinfo

DEFAULT_ENTRY_TIME = time(12, 0)


def _as_date(anchor: date | datetime) -> date:
    return anchor.date() if isinstance(anchor, datetime) else anchor


def month_start(anchor: date | datetime) -> date:
    return _as_date(anchor).replace(day=1)


def shift_month(anchor: date | datetime, offset: int) -> date:
    """First day of the month `offset` months away from `anchor`'s month."""
    d = _as_date(anchor)
    idx = d.year * 12 + (d.month - 1) + offset
    return date(idx // 12, idx % 12 + 1, 1)


def month_bounds(anchor: date | datetime) -> tuple[date, date]:
    """Half-open [first of month, first of next month)."""
    return month_start(anchor), shift_month(anchor, 1)


def is_same_month(a: date | datetime, b: date | datetime) -> bool:
    da, db = _as_date(a), _as_date(b)
    return (da.year, da.month) == (db.year, db.month)


def month_title(anchor: date | datetime) -> str:
    d = _as_date(anchor)
    return f"{calendar.month_name[d.month]} {d.year}"


def days_for_month(anchor: date | datetime, first_weekday: int | None = None) -> list[date]:
    """
    Padded calendar page for `anchor`'s month.

    Leading days of the previous month fill the first week back to
    `first_weekday`, then the whole month, then days of the next month until
    the length is a multiple of 7 (28, 35 or 42 in practice).
    """
    if first_weekday is None:
        first_weekday = calendar.firstweekday()
    if not 0 <= first_weekday <= 6:
        raise ValueError(f"first_weekday must be 0..6, got {first_weekday}")

    start, end = month_bounds(anchor)

    days: list[date] = []
    lead = (start.weekday() - first_weekday) % 7
    for i in range(lead, 0, -1):
        days.append(start - timedelta(days=i))

    current = start
    while current < end:
        days.append(current)
        current += timedelta(days=1)

    while len(days) % 7 != 0:
        days.append(days[-1] + timedelta(days=1))

    return days


def weeks_for_month(anchor: date | datetime, first_weekday: int | None = None) -> list[list[date]]:
    days = days_for_month(anchor, first_weekday)
    return [days[i : i + 7] for i in range(0, len(days), 7)]


def combine_day_and_time(
    day: date | datetime,
    at: time = DEFAULT_ENTRY_TIME,
    tz: tzinfo | None = None,
) -> datetime:
    """
    Instant for "this day at that wall-clock time" in the local calendar.

    Only hour and minute of `at` are used. tz=None means the system local zone.
    """
    naive = datetime.combine(_as_date(day), time(at.hour, at.minute))
    if tz is None:
        return naive.astimezone()
    return naive.replace(tzinfo=tz)
