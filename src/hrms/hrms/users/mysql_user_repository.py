from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        employee_id=row.get("employee_id"),
        name=row.get("name"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, username, password_hash, role, employee_id, name, is_active
                FROM users
                WHERE {where}=%s
                """,
                (value,),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return self._get_one("username", username)

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        employee_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(username, password_hash, role, employee_id, name, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (username, password_hash, role.value, employee_id, name),
            )
            return int(cur.lastrowid)

    def delete_for_employee(self, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE employee_id=%s AND role=%s", (employee_id, Role.EMPLOYEE.value))
            return cur.rowcount > 0
