from decimal import Decimal

import pytest

from src.hrms.hrms.core.enums import PayrollPolicy
from src.hrms.hrms.core.exceptions import PayrollComputationError, ValidationError
from src.hrms.hrms.payroll.model import LeaveTally
from src.hrms.hrms.payroll.synthesizer import round_currency, synthesize


def _run(base, days, *, paid=0, unpaid=0):
    return synthesize(
        employee_id="EMP001",
        employee_name="A",
        base_salary=Decimal(base),
        total_working_days=days,
        rest_days=0,
        tally=LeaveTally(paid_days=paid, unpaid_days=unpaid),
        month=2,
        year=2025,
        policy=PayrollPolicy.SIX_DAY_WEEK,
    )


def test_round_currency_is_half_up():
    assert round_currency(Decimal("0.5")) == Decimal("1")
    assert round_currency(Decimal("2.5")) == Decimal("3")
    assert round_currency(Decimal("416.49")) == Decimal("416")


def test_deduction_rounds_half_up():
    result = _run("12", 24, unpaid=1)
    assert result.deductions == Decimal("1")
    assert result.final_salary == Decimal("11")


def test_fractional_per_day_salary_keeps_invariants():
    result = _run("10000", 24, unpaid=1)
    assert result.deductions == Decimal("417")
    assert result.final_salary == Decimal("9583")
    assert result.final_salary == result.base_salary - result.deductions
    assert result.to_dict()["per_day_salary"] == 416.67


def test_paid_leave_never_reduces_salary():
    result = _run("12000", 24, paid=5)
    assert result.deductions == 0
    assert result.final_salary == Decimal("12000")
    assert result.actual_working_days == 19


def test_negative_salary_rejected():
    with pytest.raises(ValidationError):
        _run("-1", 24)


@pytest.mark.parametrize("days", [0, -3])
def test_non_positive_working_days_rejected(days):
    with pytest.raises(PayrollComputationError):
        _run("12000", days)


def test_zero_salary_is_allowed():
    result = _run("0", 24, unpaid=3)
    assert result.per_day_salary == 0
    assert result.final_salary == 0


def test_half_unit_deduction_is_taken_from_rounded_base():
    # 12001 / 24 * 12 = 6000.5
    result = _run("12001", 24, unpaid=12)
    assert result.deductions == Decimal("6001")
    assert result.final_salary == Decimal("6000")


@pytest.mark.parametrize("base, days", [("12000", 24), ("10000", 26), ("33333", 30), ("12001", 24)])
def test_more_unpaid_days_never_raise_final_salary(base, days):
    finals = [_run(base, days, unpaid=n).final_salary for n in range(0, days + 1)]
    assert all(later <= earlier for earlier, later in zip(finals, finals[1:]))
    assert finals[0] == Decimal(base)


@pytest.mark.parametrize("unpaid", [1, 3, 7])
def test_paid_days_do_not_change_pay(unpaid):
    baseline = _run("10000", 24, unpaid=unpaid)
    for paid in range(0, 10):
        result = _run("10000", 24, paid=paid, unpaid=unpaid)
        assert result.deductions == baseline.deductions
        assert result.final_salary == baseline.final_salary
