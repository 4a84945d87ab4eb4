from __future__ import annotations

from typing import Iterable, Optional

from ...employees.model import Employee, EmployeeIdentity
from ...leaves.model import LeaveInterval
from ..aggregator import aggregate_leave_days
from ..model import PayrollResult
from ..synthesizer import synthesize
from ..working_days import month_calendar
from .base import WorkingDayPolicy


class PayrollCalculator:
    """Pure payroll computation for one employee and one month.

    Holds only the (immutable) working-day policy, so one instance can be
    shared across threads.
    """

    def __init__(self, policy: WorkingDayPolicy):
        self._policy = policy

    @property
    def policy(self) -> WorkingDayPolicy:
        return self._policy

    def calculate(
        self,
        employee: Employee,
        leaves: Iterable[LeaveInterval],
        *,
        month: int,
        year: int,
        identity: Optional[EmployeeIdentity] = None,
    ) -> PayrollResult:
        cal = month_calendar(year, month)
        tally = aggregate_leave_days(
            identity or employee.identity(),
            leaves,
            month=month,
            year=year,
            policy=self._policy,
        )
        return synthesize(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            department=employee.department,
            position=employee.position,
            base_salary=employee.salary,
            total_working_days=self._policy.total_working_days(cal),
            rest_days=self._policy.rest_days(cal),
            tally=tally,
            month=month,
            year=year,
            policy=self._policy.policy,
        )
