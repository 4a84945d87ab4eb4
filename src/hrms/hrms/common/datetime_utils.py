from __future__ import annotations

import calendar
from datetime import date, datetime, time

from ..core.exceptions import InvalidPeriod, ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_hhmm(value: str) -> time:
    """Parse HH:MM (or HH:MM:SS) string into time."""
    v = (value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def parse_period(month, year) -> tuple[int, int]:
    """Validate a payroll period given as strings or ints."""
    try:
        m = int(month)
        y = int(year)
    except (TypeError, ValueError):
        raise InvalidPeriod(f"Invalid period: month={month!r} year={year!r}")
    if not 1 <= m <= 12:
        raise InvalidPeriod(f"Month must be between 1 and 12, got {m}")
    if not 1 <= y <= 9999:
        raise InvalidPeriod(f"Invalid year: {y}")
    return m, y


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of the month."""
    if not 1 <= month <= 12:
        raise InvalidPeriod(f"Month must be between 1 and 12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now()
