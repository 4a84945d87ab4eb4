from datetime import date

import pytest

from src.hrms.hrms.core.exceptions import InvalidPeriod
from src.hrms.hrms.payroll.working_days import count_rest_days, leave_days_in_month, month_calendar


@pytest.mark.parametrize(
    "year, month, days, sundays",
    [
        (2025, 1, 31, 4),
        (2025, 2, 28, 4),
        (2024, 2, 29, 4),
        (2025, 3, 31, 5),
        (2025, 11, 30, 5),
    ],
)
def test_month_calendar(year, month, days, sundays):
    cal = month_calendar(year, month)
    assert cal.days_in_month == days
    assert cal.rest_day_count == sundays


@pytest.mark.parametrize("month", [0, 13, -1])
def test_month_calendar_rejects_bad_month(month):
    with pytest.raises(InvalidPeriod):
        month_calendar(2025, month)


def test_count_rest_days_empty_range():
    assert count_rest_days(date(2025, 2, 10), date(2025, 2, 1)) == 0


def test_leave_clamped_to_month_start():
    # Jan 28 .. Feb 3 2025 overlaps Feb 1-3; Feb 2 is a Sunday
    start, end = date(2025, 1, 28), date(2025, 2, 3)
    assert leave_days_in_month(start, end, 2, 2025, exclude_rest_days=True) == 2
    assert leave_days_in_month(start, end, 2, 2025, exclude_rest_days=False) == 3


def test_leave_clamped_to_month_end():
    start, end = date(2025, 2, 27), date(2025, 3, 4)
    assert leave_days_in_month(start, end, 2, 2025, exclude_rest_days=False) == 2
    assert leave_days_in_month(start, end, 3, 2025, exclude_rest_days=False) == 4
    # Mar 2 2025 is a Sunday
    assert leave_days_in_month(start, end, 3, 2025, exclude_rest_days=True) == 3


def test_leave_outside_month_counts_zero():
    assert leave_days_in_month(date(2025, 1, 5), date(2025, 1, 9), 2, 2025, exclude_rest_days=False) == 0


def test_reversed_interval_counts_zero():
    assert leave_days_in_month(date(2025, 2, 10), date(2025, 2, 5), 2, 2025, exclude_rest_days=False) == 0


def test_single_sunday_leave_is_zero_when_rest_days_excluded():
    sunday = date(2025, 2, 9)
    assert leave_days_in_month(sunday, sunday, 2, 2025, exclude_rest_days=True) == 0
    assert leave_days_in_month(sunday, sunday, 2, 2025, exclude_rest_days=False) == 1


def test_leave_covering_whole_month():
    start, end = date(2025, 1, 1), date(2025, 3, 31)
    assert leave_days_in_month(start, end, 2, 2025, exclude_rest_days=True) == 24
    assert leave_days_in_month(start, end, 2, 2025, exclude_rest_days=False) == 28
