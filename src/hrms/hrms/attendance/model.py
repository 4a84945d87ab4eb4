from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional


@dataclass(frozen=True)
class BreakPeriod:
    break_id: int
    start_time: time
    end_time: Optional[time] = None
    duration_minutes: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.end_time is None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day."""

    attendance_id: int
    employee_id: str
    employee_name: str
    work_date: date
    login_time: time
    logout_time: Optional[time]
    total_hours: Decimal
    is_late: bool
    location: str
    breaks: tuple[BreakPeriod, ...] = field(default_factory=tuple)

    @property
    def active_break(self) -> Optional[BreakPeriod]:
        return next((b for b in self.breaks if b.is_active), None)

    @property
    def total_break_minutes(self) -> int:
        return sum(b.duration_minutes or 0 for b in self.breaks)

    @property
    def net_working_hours(self) -> Decimal:
        net = self.total_hours - Decimal(self.total_break_minutes) / Decimal(60)
        return max(net, Decimal(0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "date": self.work_date.isoformat(),
            "login_time": self.login_time.strftime("%H:%M"),
            "logout_time": self.logout_time.strftime("%H:%M") if self.logout_time else None,
            "total_hours": float(self.total_hours),
            "is_late": self.is_late,
            "location": self.location,
            "breaks": [
                {
                    "id": b.break_id,
                    "start_time": b.start_time.strftime("%H:%M"),
                    "end_time": b.end_time.strftime("%H:%M") if b.end_time else None,
                    "duration": b.duration_minutes,
                }
                for b in self.breaks
            ],
            "total_break_time": self.total_break_minutes,
            "net_working_hours": float(self.net_working_hours),
        }
