from __future__ import annotations

from datetime import date

from ...core.enums import PayrollPolicy
from ..model import MonthCalendar
from ..working_days import leave_days_in_month
from .base import WorkingDayPolicy


class SixDayWeekPolicy(WorkingDayPolicy):
    """Every calendar day except Sunday is a working day."""

    policy = PayrollPolicy.SIX_DAY_WEEK

    def total_working_days(self, cal: MonthCalendar) -> int:
        return cal.days_in_month - cal.rest_day_count

    def leave_days_in_month(self, start: date, end: date, month: int, year: int) -> int:
        return leave_days_in_month(start, end, month, year, exclude_rest_days=True)
