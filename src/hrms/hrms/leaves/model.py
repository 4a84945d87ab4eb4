from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveInterval:
    """The slice of a leave request that payroll cares about."""

    employee_id: str
    start_date: date
    end_date: date
    status: LeaveStatus
    is_paid: bool = False


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    employee_id: str
    employee_name: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    is_paid: bool
    applied_date: date

    def as_interval(self) -> LeaveInterval:
        return LeaveInterval(
            employee_id=self.employee_id,
            start_date=self.start_date,
            end_date=self.end_date,
            status=self.status,
            is_paid=self.is_paid,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "leave_type": self.leave_type.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "reason": self.reason,
            "status": self.status.value,
            "is_paid": self.is_paid,
            "applied_date": self.applied_date.isoformat(),
        }
