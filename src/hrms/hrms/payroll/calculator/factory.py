from __future__ import annotations

from ...core.enums import PayrollPolicy
from ...core.exceptions import ValidationError
from .base import WorkingDayPolicy
from .flat_month import FlatMonthPolicy
from .six_day_week import SixDayWeekPolicy

_POLICIES = {
    PayrollPolicy.SIX_DAY_WEEK: SixDayWeekPolicy,
    PayrollPolicy.FLAT_30: FlatMonthPolicy,
}


def policy_for(value: PayrollPolicy | str) -> WorkingDayPolicy:
    """Build the configured working-day policy."""
    try:
        key = PayrollPolicy(value)
    except ValueError:
        choices = ", ".join(p.value for p in PayrollPolicy)
        raise ValidationError(f"Unknown payroll policy {value!r} (expected one of: {choices})")
    return _POLICIES[key]()
