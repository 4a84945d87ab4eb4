from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import Iterable, Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_aliases: Iterable[str], work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_records(self, *, employee_aliases: Optional[Iterable[str]] = None) -> Sequence[AttendanceRecord]:
        """Newest first; everyone when no aliases are given."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        employee_name: str,
        work_date: date,
        login_time: time,
        logout_time: Optional[time],
        total_hours: Decimal,
        is_late: bool,
        location: str,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        attendance_id: int,
        *,
        login_time: time,
        logout_time: Optional[time],
        total_hours: Decimal,
        is_late: bool,
        location: str,
    ) -> bool:
        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError

    def start_break(self, attendance_id: int, start_time: time) -> int:
        raise NotImplementedError

    def end_break(self, break_id: int, end_time: time, duration_minutes: int) -> bool:
        raise NotImplementedError
