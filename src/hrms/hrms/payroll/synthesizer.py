from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from ..core.enums import PayrollPolicy
from ..core.exceptions import PayrollComputationError, ValidationError
from .model import LeaveTally, PayrollResult

WHOLE = Decimal("1")


def round_currency(value: Decimal) -> Decimal:
    return value.quantize(WHOLE, rounding=ROUND_HALF_UP)


def synthesize(
    *,
    employee_id: str,
    employee_name: str,
    base_salary: Decimal,
    total_working_days: int,
    rest_days: int,
    tally: LeaveTally,
    month: int,
    year: int,
    policy: PayrollPolicy,
    department: str = "",
    position: str = "",
) -> PayrollResult:
    """Combine salary, working days and leave tally into a PayrollResult.

    Only unpaid leave feeds the deduction; paid leave is informational.
    """
    base_salary = Decimal(base_salary)
    if base_salary < 0:
        raise ValidationError(f"Salary must not be negative (employee {employee_id})")
    if total_working_days <= 0:
        raise PayrollComputationError(
            f"Working days must be positive, got {total_working_days} for {year}-{month:02d}"
        )

    per_day_salary = base_salary / Decimal(total_working_days)
    deductions = round_currency(Decimal(tally.unpaid_days) * per_day_salary)
    # final == round(base) - deductions exactly; the difference is never re-rounded
    final_salary = round_currency(base_salary) - deductions

    return PayrollResult(
        employee_id=employee_id,
        employee_name=employee_name,
        department=department,
        position=position,
        base_salary=base_salary,
        total_working_days=total_working_days,
        rest_days=rest_days,
        actual_working_days=total_working_days - tally.paid_days - tally.unpaid_days,
        paid_leave_days=tally.paid_days,
        unpaid_leave_days=tally.unpaid_days,
        per_day_salary=per_day_salary,
        deductions=deductions,
        final_salary=final_salary,
        month=month,
        year=year,
        policy=policy,
    )
