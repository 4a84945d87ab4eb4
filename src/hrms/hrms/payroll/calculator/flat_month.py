from __future__ import annotations

from datetime import date

from ...core.constants import FLAT_MONTH_DAYS
from ...core.enums import PayrollPolicy
from ..model import MonthCalendar
from ..working_days import leave_days_in_month
from .base import WorkingDayPolicy


class FlatMonthPolicy(WorkingDayPolicy):
    """Every month has 30 working days; leave counts every calendar day."""

    policy = PayrollPolicy.FLAT_30

    def __init__(self, days: int = FLAT_MONTH_DAYS):
        self._days = int(days)

    def total_working_days(self, cal: MonthCalendar) -> int:
        return self._days

    def leave_days_in_month(self, start: date, end: date, month: int, year: int) -> int:
        return leave_days_in_month(start, end, month, year, exclude_rest_days=False)

    def rest_days(self, cal: MonthCalendar) -> int:
        return 0
