from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from ..core.enums import PayrollPolicy

CENT = Decimal("0.01")


@dataclass(frozen=True)
class MonthCalendar:
    year: int
    month: int
    days_in_month: int
    rest_day_count: int


@dataclass(frozen=True)
class LeaveTally:
    paid_days: int = 0
    unpaid_days: int = 0

    @property
    def total_days(self) -> int:
        return self.paid_days + self.unpaid_days


@dataclass(frozen=True)
class PayrollResult:
    """One employee's payroll breakdown for a month.

    ``per_day_salary`` keeps full precision; ``deductions`` and
    ``final_salary`` are already rounded to whole currency units.
    """

    employee_id: str
    employee_name: str
    base_salary: Decimal
    total_working_days: int
    rest_days: int
    actual_working_days: int
    paid_leave_days: int
    unpaid_leave_days: int
    per_day_salary: Decimal
    deductions: Decimal
    final_salary: Decimal
    month: int
    year: int
    policy: PayrollPolicy
    department: str = ""
    position: str = ""

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "department": self.department,
            "position": self.position,
            "base_salary": float(self.base_salary),
            "total_working_days": self.total_working_days,
            "rest_days": self.rest_days,
            "actual_working_days": self.actual_working_days,
            "paid_leave_days": self.paid_leave_days,
            "unpaid_leave_days": self.unpaid_leave_days,
            "per_day_salary": float(self.per_day_salary.quantize(CENT, rounding=ROUND_HALF_UP)),
            "deductions": float(self.deductions),
            "final_salary": float(self.final_salary),
            "month": self.month,
            "year": self.year,
            "policy": self.policy.value,
        }


@dataclass(frozen=True)
class PayrollReport:
    month: int
    year: int
    policy: PayrollPolicy
    rows: list[PayrollResult]

    @property
    def total_payroll(self) -> Decimal:
        return sum((r.final_salary for r in self.rows), Decimal(0))

    @property
    def total_deductions(self) -> Decimal:
        return sum((r.deductions for r in self.rows), Decimal(0))

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "year": self.year,
            "policy": self.policy.value,
            "total_payroll": float(self.total_payroll),
            "total_deductions": float(self.total_deductions),
            "rows": [r.to_dict() for r in self.rows],
        }


@dataclass(frozen=True)
class PayrollRecord:
    """A persisted snapshot of a PayrollResult."""

    payroll_id: int
    employee_id: str
    employee_name: str
    base_salary: Decimal
    working_days: int
    paid_leaves: int
    unpaid_leaves: int
    deductions: Decimal
    final_salary: Decimal
    month: int
    year: int
    policy: str

    def to_dict(self) -> dict:
        return {
            "id": self.payroll_id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "base_salary": float(self.base_salary),
            "working_days": self.working_days,
            "paid_leaves": self.paid_leaves,
            "unpaid_leaves": self.unpaid_leaves,
            "deductions": float(self.deductions),
            "final_salary": float(self.final_salary),
            "month": self.month,
            "year": self.year,
            "policy": self.policy,
        }
