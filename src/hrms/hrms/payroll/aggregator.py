from __future__ import annotations

from typing import Iterable

from ..core.enums import LeaveStatus
from ..employees.model import EmployeeIdentity
from ..leaves.model import LeaveInterval
from .calculator.base import WorkingDayPolicy
from .model import LeaveTally


def aggregate_leave_days(
    identity: EmployeeIdentity,
    leaves: Iterable[LeaveInterval],
    *,
    month: int,
    year: int,
    policy: WorkingDayPolicy,
) -> LeaveTally:
    """Split one employee's approved leave in the month into paid/unpaid days.

    Pending and rejected intervals are ignored even if passed in.
    """
    paid = 0
    unpaid = 0
    for leave in leaves:
        if leave.status != LeaveStatus.APPROVED or not identity.matches(leave.employee_id):
            continue
        days = policy.leave_days_in_month(leave.start_date, leave.end_date, month, year)
        if days <= 0:
            continue
        if leave.is_paid:
            paid += days
        else:
            unpaid += days
    return LeaveTally(paid_days=paid, unpaid_days=unpaid)
