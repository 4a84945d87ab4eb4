from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty
from ..core.enums import LeaveStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, InvalidDateRange, NotFoundError, ValidationError
from ..employees.model import EmployeeIdentity
from ..employees.repository import EmployeeDirectory
from ..users.model import AuthContext
from .model import LeaveRequest
from .repository import LeaveLedger

logger = logging.getLogger(__name__)


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in {"true", "1", "yes"}:
        return True
    if text in {"false", "0", "no", ""}:
        return False
    raise ValidationError(f"Invalid boolean: {value!r}")


class LeaveService:
    """Use case: employees request leave, admins approve/reject and set paid."""

    def __init__(self, leaves: LeaveLedger, employees: EmployeeDirectory):
        self._leaves = leaves
        self._employees = employees

    def _identity_for(self, ctx: AuthContext) -> EmployeeIdentity:
        identity = self._employees.resolve_identity(ctx.employee_id) if ctx.employee_id else None
        if not identity:
            raise NotFoundError("Employee record not found")
        return identity

    def create(self, ctx: AuthContext, data: dict, *, today: Optional[date] = None) -> LeaveRequest:
        if ctx.role != Role.EMPLOYEE:
            raise AuthorizationError("Admins cannot create leave requests")

        employee = self._employees.get_by_alias(ctx.employee_id or "")
        if not employee:
            raise NotFoundError("Employee record not found")

        try:
            leave_type = LeaveType(data.get("leave_type") or data.get("leaveType") or "")
        except ValueError:
            raise ValidationError("Invalid leave type")
        start_date = parse_iso_date(data.get("start_date") or data.get("startDate") or "")
        end_date = parse_iso_date(data.get("end_date") or data.get("endDate") or "")
        if start_date > end_date:
            raise InvalidDateRange("End date must be after start date")
        reason = require_non_empty(data.get("reason"), "Reason")

        identity = employee.identity()
        if self._leaves.find_overlapping(
            employee_aliases=sorted(identity.aliases),
            start_date=start_date,
            end_date=end_date,
        ):
            raise ValidationError("You already have a leave request for overlapping dates")

        leave_id = self._leaves.create(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            applied_date=today or date.today(),
        )
        logger.info("Leave %s requested by %s (%s..%s)", leave_id, employee.employee_id, start_date, end_date)
        return self._leaves.get(leave_id)

    def list_for(self, ctx: AuthContext) -> list[LeaveRequest]:
        if ctx.is_admin:
            return list(self._leaves.list_requests())
        identity = self._identity_for(ctx)
        return list(self._leaves.list_requests(employee_aliases=sorted(identity.aliases)))

    def decide(self, ctx: AuthContext, leave_id: int, data: dict) -> LeaveRequest:
        """Admin update; only the status and paid flag can change."""
        if not ctx.is_admin:
            raise AuthorizationError("Admin access required")

        status = None
        if data.get("status"):
            try:
                status = LeaveStatus(str(data["status"]).lower())
            except ValueError:
                raise ValidationError("Invalid leave status")
        is_paid = None
        for key in ("is_paid", "isPaid"):
            if key in data and data[key] is not None:
                is_paid = _parse_bool(data[key])
        if status is None and is_paid is None:
            raise ValidationError("Nothing to update")

        if not self._leaves.get(leave_id):
            raise NotFoundError("Leave request not found")
        self._leaves.update_decision(leave_id, status=status, is_paid=is_paid)
        updated = self._leaves.get(leave_id)
        logger.info(
            "Leave %s updated by %s: status=%s paid=%s",
            leave_id, ctx.username, updated.status.value, updated.is_paid,
        )
        return updated

    def delete(self, ctx: AuthContext, leave_id: int) -> None:
        leave = self._leaves.get(leave_id)
        if not leave:
            raise NotFoundError("Leave request not found")

        if not ctx.is_admin:
            identity = self._identity_for(ctx)
            if not identity.matches(leave.employee_id):
                raise AuthorizationError("You can only delete your own leave requests")
            if leave.status != LeaveStatus.PENDING:
                raise ValidationError("Only pending leave requests can be deleted")

        self._leaves.delete(leave_id)
        logger.info("Leave %s deleted by %s", leave_id, ctx.username)
