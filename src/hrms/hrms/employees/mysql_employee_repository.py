from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee, EmployeeIdentity
from .repository import EmployeeDirectory

_COLUMNS = (
    "row_id, employee_id, employee_code, name, email, username, department, position, salary, joining_date, phone"
)

UPDATABLE_FIELDS = (
    "employee_code",
    "name",
    "email",
    "username",
    "department",
    "position",
    "salary",
    "joining_date",
    "phone",
)


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        row_id=int(r["row_id"]),
        employee_id=r["employee_id"],
        employee_code=r.get("employee_code"),
        name=r["name"],
        email=r["email"],
        username=r["username"],
        department=r["department"],
        position=r["position"],
        salary=Decimal(r["salary"]),
        joining_date=r["joining_date"],
        phone=r.get("phone") or "",
    )


class MySQLEmployeeRepository(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_employees(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_by_alias(self, alias: str) -> Optional[Employee]:
        alias = str(alias or "").strip()
        if not alias:
            return None
        row_id = int(alias) if alias.isdigit() else -1
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE employee_id=%s OR employee_code=%s OR row_id=%s
                ORDER BY (employee_id=%s) DESC
                LIMIT 1
                """,
                (alias, alias, row_id, alias),
            )
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def resolve_identity(self, alias: str) -> Optional[EmployeeIdentity]:
        employee = self.get_by_alias(alias)
        return employee.identity() if employee else None

    def find_conflicts(
        self,
        *,
        employee_id: str,
        employee_code: Optional[str],
        username: str,
        email: str,
        exclude_row_id: Optional[int] = None,
    ) -> list[str]:
        checks = [("employee_id", employee_id), ("username", username), ("email", email)]
        if employee_code:
            checks.append(("employee_code", employee_code))

        taken: list[str] = []
        with db_cursor(self._conn_factory) as (_, cur):
            for column, value in checks:
                cur.execute(
                    f"SELECT row_id FROM employees WHERE {column}=%s AND row_id<>%s LIMIT 1",
                    (value, exclude_row_id or 0),
                )
                if fetchone(cur):
                    taken.append(column)
        return taken

    def create(
        self,
        *,
        employee_id: str,
        employee_code: Optional[str],
        name: str,
        email: str,
        username: str,
        department: str,
        position: str,
        salary: Decimal,
        joining_date: date,
        phone: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees
                    (employee_id, employee_code, name, email, username, department, position, salary, joining_date, phone)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (employee_id, employee_code, name, email, username, department, position, salary, joining_date, phone),
            )
            return int(cur.lastrowid)

    def update(self, row_id: int, **fields) -> bool:
        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if not changes:
            return False
        assignments = ", ".join(f"{k}=%s" for k in changes)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employees SET {assignments} WHERE row_id=%s",
                (*changes.values(), int(row_id)),
            )
            return cur.rowcount > 0

    def delete(self, row_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE row_id=%s", (int(row_id),))
            return cur.rowcount > 0
