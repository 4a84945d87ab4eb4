"""Calendar arithmetic for payroll: rest days and leave/month overlap."""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from ..common.datetime_utils import month_bounds
from ..core.constants import REST_WEEKDAY
from ..core.exceptions import InvalidPeriod
from .model import MonthCalendar


def is_rest_day(day: date) -> bool:
    return day.weekday() == REST_WEEKDAY


def count_rest_days(start: date, end: date) -> int:
    """Number of Sundays in [start, end]; 0 for an empty range."""
    if start > end:
        return 0
    count = 0
    day = start
    while day <= end:
        if is_rest_day(day):
            count += 1
        day += timedelta(days=1)
    return count


def month_calendar(year: int, month: int) -> MonthCalendar:
    if not 1 <= month <= 12:
        raise InvalidPeriod(f"Month must be between 1 and 12, got {month}")
    days_in_month = calendar.monthrange(year, month)[1]
    first, last = date(year, month, 1), date(year, month, days_in_month)
    return MonthCalendar(
        year=year,
        month=month,
        days_in_month=days_in_month,
        rest_day_count=count_rest_days(first, last),
    )


def leave_days_in_month(
    start: date,
    end: date,
    month: int,
    year: int,
    *,
    exclude_rest_days: bool,
) -> int:
    """Days of the inclusive leave interval that fall inside the month."""
    month_start, month_end = month_bounds(year, month)
    overlap_start = max(start, month_start)
    overlap_end = min(end, month_end)
    if overlap_start > overlap_end:
        return 0

    days = (overlap_end - overlap_start).days + 1
    if exclude_rest_days:
        days -= count_rest_days(overlap_start, overlap_end)
    return days
