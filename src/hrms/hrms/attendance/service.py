from __future__ import annotations

import logging
from datetime import date, datetime, time
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..common.datetime_utils import now_local, parse_hhmm, parse_iso_date
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LATE_AFTER, DEFAULT_LOCATION
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeDirectory
from ..users.model import AuthContext
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def minutes_between(start: time, end: time) -> int:
    """Whole minutes from start to end on the same day (never negative)."""
    anchor = date(2000, 1, 1)
    delta = datetime.combine(anchor, end) - datetime.combine(anchor, start)
    return max(int(delta.total_seconds() // 60), 0)


def working_hours(login: time, logout: Optional[time]) -> Decimal:
    if logout is None:
        return Decimal(0)
    if logout < login:
        raise ValidationError("Logout time cannot be before login time")
    hours = Decimal(minutes_between(login, logout)) / Decimal(60)
    return hours.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeDirectory,
        *,
        late_after: str | time = DEFAULT_LATE_AFTER,
    ):
        self._attendance = attendance
        self._employees = employees
        self._late_after = late_after if isinstance(late_after, time) else parse_hhmm(late_after)

    def is_late(self, login: time) -> bool:
        return login.replace(second=0, microsecond=0) > self._late_after

    def _employee_for(self, ctx: AuthContext) -> Employee:
        employee = self._employees.get_by_alias(ctx.employee_id or "")
        if not employee:
            raise NotFoundError("Employee record not found")
        return employee

    def _get_owned(self, ctx: AuthContext, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        if not ctx.is_admin and not self._employee_for(ctx).identity().matches(record.employee_id):
            raise AuthorizationError("Not your attendance record")
        return record

    def check_in(self, ctx: AuthContext, *, now: Optional[datetime] = None, location: str = "") -> AttendanceRecord:
        now = now or now_local()
        today = now.date()
        employee = self._employee_for(ctx)

        if self._attendance.get_for_employee_and_date(sorted(employee.identity().aliases), today):
            raise ValidationError("Attendance already marked for today")

        login = now.time().replace(microsecond=0)
        attendance_id = self._attendance.create(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            work_date=today,
            login_time=login,
            logout_time=None,
            total_hours=Decimal(0),
            is_late=self.is_late(login),
            location=(location or "").strip() or DEFAULT_LOCATION,
        )
        logger.info("Check-in %s for %s at %s", attendance_id, employee.employee_id, login)
        return self._attendance.get(attendance_id)

    def check_out(self, ctx: AuthContext, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        employee = self._employee_for(ctx)

        record = self._attendance.get_for_employee_and_date(sorted(employee.identity().aliases), now.date())
        if not record:
            raise ValidationError("You have not checked in today")
        if record.logout_time is not None:
            raise ValidationError("You have already checked out today")
        if record.active_break:
            raise ValidationError("End your break before checking out")

        logout = now.time().replace(microsecond=0)
        self._attendance.update(
            record.attendance_id,
            login_time=record.login_time,
            logout_time=logout,
            total_hours=working_hours(record.login_time, logout),
            is_late=record.is_late,
            location=record.location,
        )
        logger.info("Check-out %s for %s at %s", record.attendance_id, employee.employee_id, logout)
        return self._attendance.get(record.attendance_id)

    def start_break(self, ctx: AuthContext, attendance_id: int, start_time: str) -> AttendanceRecord:
        record = self._get_owned(ctx, attendance_id)
        start = parse_hhmm(require_non_empty(start_time, "Start time"))
        if record.active_break:
            raise ValidationError("There is already an active break")
        if record.logout_time is not None:
            raise ValidationError("Attendance is already closed")
        self._attendance.start_break(record.attendance_id, start)
        return self._attendance.get(record.attendance_id)

    def end_break(self, ctx: AuthContext, attendance_id: int, end_time: str) -> AttendanceRecord:
        record = self._get_owned(ctx, attendance_id)
        end = parse_hhmm(require_non_empty(end_time, "End time"))
        active = record.active_break
        if not active:
            raise ValidationError("No active break found")
        if end < active.start_time:
            raise ValidationError("Break cannot end before it starts")
        self._attendance.end_break(active.break_id, end, minutes_between(active.start_time, end))
        return self._attendance.get(record.attendance_id)

    def list_for(self, ctx: AuthContext, *, employee_id: Optional[str] = None) -> list[AttendanceRecord]:
        if ctx.is_admin:
            if not employee_id:
                return list(self._attendance.list_records())
            employee = self._employees.get_by_alias(employee_id)
            if not employee:
                raise NotFoundError("Employee not found")
            return list(self._attendance.list_records(employee_aliases=sorted(employee.identity().aliases)))

        employee = self._employee_for(ctx)
        return list(self._attendance.list_records(employee_aliases=sorted(employee.identity().aliases)))

    def manual_entry(self, ctx: AuthContext, data: dict) -> AttendanceRecord:
        if not ctx.is_admin:
            raise AuthorizationError("Admin access required")

        employee = self._employees.get_by_alias(require_non_empty(data.get("employee_id"), "Employee ID"))
        if not employee:
            raise NotFoundError("Employee not found")
        work_date = parse_iso_date(data.get("date") or "")
        login = parse_hhmm(require_non_empty(data.get("login_time"), "Login time"))
        logout = parse_hhmm(data["logout_time"]) if data.get("logout_time") else None

        if self._attendance.get_for_employee_and_date(sorted(employee.identity().aliases), work_date):
            raise ValidationError("Attendance already exists for this date")

        attendance_id = self._attendance.create(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            work_date=work_date,
            login_time=login,
            logout_time=logout,
            total_hours=working_hours(login, logout),
            is_late=self.is_late(login),
            location=(data.get("location") or "").strip() or DEFAULT_LOCATION,
        )
        logger.info("Manual attendance %s for %s on %s by %s", attendance_id, employee.employee_id, work_date, ctx.username)
        return self._attendance.get(attendance_id)

    def admin_update(self, ctx: AuthContext, attendance_id: int, data: dict) -> AttendanceRecord:
        if not ctx.is_admin:
            raise AuthorizationError("Admin access required")
        record = self._attendance.get(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")

        login = parse_hhmm(data["login_time"]) if data.get("login_time") else record.login_time
        if "logout_time" in data:
            logout = parse_hhmm(data["logout_time"]) if data["logout_time"] else None
        else:
            logout = record.logout_time
        location = (data.get("location") or "").strip() or record.location

        self._attendance.update(
            record.attendance_id,
            login_time=login,
            logout_time=logout,
            total_hours=working_hours(login, logout),
            is_late=self.is_late(login),
            location=location,
        )
        return self._attendance.get(record.attendance_id)

    def delete(self, ctx: AuthContext, attendance_id: int) -> None:
        if not ctx.is_admin:
            raise AuthorizationError("Admin access required")
        if not self._attendance.delete(attendance_id):
            raise NotFoundError("Attendance record not found")
        logger.info("Attendance %s deleted by %s", attendance_id, ctx.username)
