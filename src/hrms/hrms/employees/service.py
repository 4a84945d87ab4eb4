from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_min_length, require_non_empty, require_salary
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import Employee, EmployeeIdentity
from .repository import EmployeeDirectory

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: manage employee records (admin) and resolve identities."""

    def __init__(self, employees: EmployeeDirectory, users: UserRepository):
        self._employees = employees
        self._users = users

    def list_employees(self) -> list[Employee]:
        return list(self._employees.list_employees())

    def get(self, alias: str) -> Employee:
        employee = self._employees.get_by_alias(alias)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def resolve_identity(self, alias: Optional[str]) -> EmployeeIdentity:
        identity = self._employees.resolve_identity(alias) if alias else None
        if not identity:
            raise NotFoundError("Employee record not found")
        return identity

    def _check_unique(
        self,
        *,
        employee_id: str,
        employee_code: Optional[str],
        username: str,
        email: str,
        exclude_row_id: Optional[int] = None,
    ) -> None:
        taken = self._employees.find_conflicts(
            employee_id=employee_id,
            employee_code=employee_code,
            username=username,
            email=email,
            exclude_row_id=exclude_row_id,
        )
        if taken:
            raise ConflictError(f"Already in use: {', '.join(taken)}")

    def create(self, data: dict) -> Employee:
        employee_id = require_non_empty(data.get("id") or data.get("employee_id"), "Employee ID")
        employee_code = (data.get("employee_code") or "").strip() or None
        name = require_non_empty(data.get("name"), "Name")
        email = require_non_empty(data.get("email"), "Email").lower()
        username = require_non_empty(data.get("username"), "Username")
        password = require_min_length(data.get("password") or "", "Password", 6)
        department = require_non_empty(data.get("department"), "Department")
        position = require_non_empty(data.get("position"), "Position")
        salary = require_salary(data.get("salary"))
        joining_raw = data.get("joining_date") or data.get("join_date")
        joining_date = parse_iso_date(joining_raw) if joining_raw else date.today()
        phone = (data.get("phone") or "").strip()

        self._check_unique(employee_id=employee_id, employee_code=employee_code, username=username, email=email)
        if self._users.get_by_username(username):
            raise ConflictError("Already in use: username")

        row_id = self._employees.create(
            employee_id=employee_id,
            employee_code=employee_code,
            name=name,
            email=email,
            username=username,
            department=department,
            position=position,
            salary=salary,
            joining_date=joining_date,
            phone=phone,
        )
        self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            role=Role.EMPLOYEE,
            employee_id=employee_id,
            name=name,
        )
        logger.info("Created employee %s (row %s)", employee_id, row_id)
        return self.get(employee_id)

    def update(self, alias: str, data: dict) -> Employee:
        current = self.get(alias)
        changes: dict = {}

        for key in ("name", "department", "position"):
            if key in data:
                changes[key] = require_non_empty(data[key], key.capitalize())
        if "email" in data:
            changes["email"] = require_non_empty(data["email"], "Email").lower()
        if "employee_code" in data:
            changes["employee_code"] = (data["employee_code"] or "").strip() or None
        if "phone" in data:
            changes["phone"] = (data["phone"] or "").strip()
        if "salary" in data:
            changes["salary"] = require_salary(data["salary"])
        if "joining_date" in data:
            changes["joining_date"] = parse_iso_date(data["joining_date"])

        if not changes:
            raise ValidationError("Nothing to update")

        self._check_unique(
            employee_id=current.employee_id,
            employee_code=changes.get("employee_code", current.employee_code),
            username=current.username,
            email=changes.get("email", current.email),
            exclude_row_id=current.row_id,
        )
        self._employees.update(current.row_id, **changes)
        logger.info("Updated employee %s: %s", current.employee_id, sorted(changes))
        return self.get(current.employee_id)

    def delete(self, alias: str) -> None:
        current = self.get(alias)
        if not self._employees.delete(current.row_id):
            raise NotFoundError("Employee not found")
        self._users.delete_for_employee(current.employee_id)
        logger.info("Deleted employee %s", current.employee_id)
