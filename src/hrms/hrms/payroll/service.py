from __future__ import annotations

import logging
from typing import Optional

from ..common.datetime_utils import parse_period
from ..core.exceptions import AuthorizationError, NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeDirectory
from ..leaves.repository import LeaveLedger
from ..users.model import AuthContext
from .calculator.payroll_calculator import PayrollCalculator
from .model import PayrollRecord, PayrollReport, PayrollResult
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Builds payroll from the employee directory and the leave ledger.

    The calculator only ever sees already-fetched, immutable data.
    """

    def __init__(
        self,
        employees: EmployeeDirectory,
        leaves: LeaveLedger,
        records: PayrollRepository,
        *,
        calculator: PayrollCalculator,
    ):
        self._employees = employees
        self._leaves = leaves
        self._records = records
        self._calculator = calculator

    def generate_report(self, month, year) -> PayrollReport:
        month, year = parse_period(month, year)
        employees = list(self._employees.list_employees())
        approved = list(self._leaves.list_approved())

        rows = [self._calculator.calculate(e, approved, month=month, year=year) for e in employees]
        logger.info(
            "Payroll %04d-%02d (%s): %d employees, %d approved leaves",
            year, month, self._calculator.policy.policy.value, len(rows), len(approved),
        )
        return PayrollReport(month=month, year=year, policy=self._calculator.policy.policy, rows=rows)

    def _employee_visible_to(self, ctx: AuthContext, employee_id: Optional[str]) -> Employee:
        alias = employee_id or ctx.employee_id
        employee = self._employees.get_by_alias(alias) if alias else None
        if not employee:
            raise NotFoundError("Employee not found")
        if not ctx.is_admin and not employee.identity().matches(ctx.employee_id):
            raise AuthorizationError("You can only view your own payslip")
        return employee

    def payslip(self, ctx: AuthContext, month, year, *, employee_id: Optional[str] = None) -> tuple[Employee, PayrollResult]:
        month, year = parse_period(month, year)
        employee = self._employee_visible_to(ctx, employee_id)
        identity = employee.identity()
        leaves = self._leaves.list_approved(sorted(identity.aliases))
        result = self._calculator.calculate(employee, leaves, month=month, year=year, identity=identity)
        return employee, result

    def save_report(self, ctx: AuthContext, month, year) -> list[PayrollRecord]:
        if not ctx.is_admin:
            raise AuthorizationError("Admin access required")
        report = self.generate_report(month, year)
        for row in report.rows:
            self._records.upsert(row)
        logger.info("Saved %d payroll records for %04d-%02d", len(report.rows), report.year, report.month)
        ids = {row.employee_id for row in report.rows}
        return [
            r for r in self._records.list_records()
            if r.employee_id in ids and r.month == report.month and r.year == report.year
        ]

    def list_records(self, ctx: AuthContext) -> list[PayrollRecord]:
        if ctx.is_admin:
            return list(self._records.list_records())
        identity = self._employees.resolve_identity(ctx.employee_id) if ctx.employee_id else None
        if not identity:
            raise NotFoundError("Employee record not found")
        return list(self._records.list_records(employee_aliases=sorted(identity.aliases)))
