from datetime import date

from src.hrms.hrms.core.enums import LeaveStatus
from src.hrms.hrms.employees.model import EmployeeIdentity
from src.hrms.hrms.leaves.model import LeaveInterval
from src.hrms.hrms.payroll.aggregator import aggregate_leave_days
from src.hrms.hrms.payroll.calculator.flat_month import FlatMonthPolicy
from src.hrms.hrms.payroll.calculator.six_day_week import SixDayWeekPolicy

IDENTITY = EmployeeIdentity(primary_id="EMP001", aliases=frozenset({"E-0001", "7"}))


def _leave(ref, start, end, *, status=LeaveStatus.APPROVED, paid=False):
    return LeaveInterval(employee_id=ref, start_date=start, end_date=end, status=status, is_paid=paid)


def test_no_leave_gives_zero_tally():
    tally = aggregate_leave_days(IDENTITY, [], month=2, year=2025, policy=SixDayWeekPolicy())
    assert (tally.paid_days, tally.unpaid_days) == (0, 0)


def test_splits_paid_and_unpaid():
    leaves = [
        _leave("EMP001", date(2025, 2, 3), date(2025, 2, 4)),
        _leave("EMP001", date(2025, 2, 10), date(2025, 2, 12), paid=True),
    ]
    tally = aggregate_leave_days(IDENTITY, leaves, month=2, year=2025, policy=SixDayWeekPolicy())
    assert tally.unpaid_days == 2
    assert tally.paid_days == 3
    assert tally.total_days == 5


def test_pending_and_rejected_are_ignored():
    leaves = [
        _leave("EMP001", date(2025, 2, 3), date(2025, 2, 4), status=LeaveStatus.PENDING),
        _leave("EMP001", date(2025, 2, 5), date(2025, 2, 6), status=LeaveStatus.REJECTED),
    ]
    tally = aggregate_leave_days(IDENTITY, leaves, month=2, year=2025, policy=FlatMonthPolicy())
    assert tally.total_days == 0


def test_matches_any_alias_and_skips_other_employees():
    leaves = [
        _leave("E-0001", date(2025, 2, 3), date(2025, 2, 3)),
        _leave("7", date(2025, 2, 4), date(2025, 2, 4)),
        _leave("EMP002", date(2025, 2, 5), date(2025, 2, 7)),
    ]
    tally = aggregate_leave_days(IDENTITY, leaves, month=2, year=2025, policy=FlatMonthPolicy())
    assert tally.unpaid_days == 2


def test_identity_always_contains_primary_id():
    identity = EmployeeIdentity(primary_id="EMP009")
    assert identity.matches("EMP009")
    assert not identity.matches(None)
    assert not identity.matches("")
