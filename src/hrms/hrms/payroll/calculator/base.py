from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from ...core.enums import PayrollPolicy
from ..model import MonthCalendar


class WorkingDayPolicy(ABC):
    """Strategy for counting working days and leave days in a month."""

    policy: PayrollPolicy

    @abstractmethod
    def total_working_days(self, cal: MonthCalendar) -> int:
        raise NotImplementedError

    @abstractmethod
    def leave_days_in_month(self, start: date, end: date, month: int, year: int) -> int:
        raise NotImplementedError

    def rest_days(self, cal: MonthCalendar) -> int:
        return cal.rest_day_count
