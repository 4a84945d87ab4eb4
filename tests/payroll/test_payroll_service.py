from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.hrms.hrms.core.enums import LeaveStatus, PayrollPolicy
from src.hrms.hrms.core.exceptions import AuthorizationError, InvalidPeriod, NotFoundError
from tests.fakes import ADMIN, employee_ctx, fake_settings, make_container, make_employee


@pytest.fixture
def alice():
    return make_employee("EMP001", row_id=1, salary="12000", name="Alice")


@pytest.fixture
def bob():
    return make_employee("EMP002", row_id=2, salary="24000", name="Bob")


@pytest.fixture
def container(alice, bob):
    c = make_container([alice, bob])
    c.leaves_repo.add("EMP001", date(2025, 2, 3), date(2025, 2, 4))
    c.leaves_repo.add("EMP002", date(2025, 2, 10), date(2025, 2, 10), is_paid=True)
    c.leaves_repo.add("EMP002", date(2025, 2, 11), date(2025, 2, 12), status=LeaveStatus.PENDING)
    return c


def test_report_covers_every_employee(container):
    report = container.payroll_service.generate_report(2, 2025)

    assert report.policy == PayrollPolicy.SIX_DAY_WEEK
    rows = {r.employee_id: r for r in report.rows}
    assert set(rows) == {"EMP001", "EMP002"}
    assert rows["EMP001"].final_salary == Decimal("11000")
    assert rows["EMP002"].paid_leave_days == 1
    assert rows["EMP002"].final_salary == Decimal("24000")
    assert report.total_payroll == Decimal("35000")
    assert report.total_deductions == Decimal("1000")


def test_report_accepts_string_period(container):
    report = container.payroll_service.generate_report("2", "2025")
    assert (report.month, report.year) == (2, 2025)


@pytest.mark.parametrize("month, year", [("13", "2025"), ("x", "2025"), (None, 2025)])
def test_report_rejects_bad_period(container, month, year):
    with pytest.raises(InvalidPeriod):
        container.payroll_service.generate_report(month, year)


def test_flat_policy_from_settings(alice):
    c = make_container([alice], settings=fake_settings(PAYROLL_POLICY="flat_30"))
    report = c.payroll_service.generate_report(2, 2025)
    assert report.policy == PayrollPolicy.FLAT_30
    assert report.rows[0].total_working_days == 30


def test_employee_sees_own_payslip(container, alice):
    employee, result = container.payroll_service.payslip(employee_ctx(alice), 2, 2025)
    assert employee.employee_id == "EMP001"
    assert result.final_salary == Decimal("11000")


def test_employee_cannot_see_other_payslip(container, alice):
    with pytest.raises(AuthorizationError):
        container.payroll_service.payslip(employee_ctx(alice), 2, 2025, employee_id="EMP002")


def test_admin_can_see_any_payslip(container):
    _, result = container.payroll_service.payslip(ADMIN, 2, 2025, employee_id="EMP002")
    assert result.employee_id == "EMP002"


def test_payslip_for_unknown_employee(container):
    with pytest.raises(NotFoundError):
        container.payroll_service.payslip(ADMIN, 2, 2025, employee_id="NOPE")


def test_save_report_is_idempotent_per_month(container):
    first = container.payroll_service.save_report(ADMIN, 2, 2025)
    second = container.payroll_service.save_report(ADMIN, 2, 2025)

    assert len(first) == len(second) == 2
    assert sorted(r.payroll_id for r in first) == sorted(r.payroll_id for r in second)
    assert len(container.payroll_service.list_records(ADMIN)) == 2


def test_save_report_requires_admin(container, alice):
    with pytest.raises(AuthorizationError):
        container.payroll_service.save_report(employee_ctx(alice), 2, 2025)


def test_employee_lists_only_own_records(container, alice):
    container.payroll_service.save_report(ADMIN, 2, 2025)
    records = container.payroll_service.list_records(employee_ctx(alice))
    assert [r.employee_id for r in records] == ["EMP001"]
    assert records[0].final_salary == Decimal("11000")
