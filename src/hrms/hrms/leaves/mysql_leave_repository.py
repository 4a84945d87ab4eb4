from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import LeaveInterval, LeaveRequest
from .repository import LeaveLedger

_COLUMNS = "leave_id, employee_id, employee_name, leave_type, start_date, end_date, reason, status, is_paid, applied_date"


def _row_to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        employee_id=r["employee_id"],
        employee_name=r["employee_name"],
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        is_paid=bool(r["is_paid"]),
        applied_date=r["applied_date"],
    )


class MySQLLeaveRepository(LeaveLedger):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: str,
        employee_name: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
        applied_date: date,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests
                    (employee_id, employee_name, leave_type, start_date, end_date, reason, status, is_paid, applied_date)
                VALUES (%s,%s,%s,%s,%s,%s,%s,0,%s)
                """,
                (employee_id, employee_name, leave_type.value, start_date, end_date, reason,
                 LeaveStatus.PENDING.value, applied_date),
            )
            return int(cur.lastrowid)

    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list_requests(self, *, employee_aliases: Optional[Iterable[str]] = None) -> Sequence[LeaveRequest]:
        sql = f"SELECT {_COLUMNS} FROM leave_requests"
        params: tuple = ()
        if employee_aliases is not None:
            placeholders, params = in_clause(employee_aliases)
            sql += f" WHERE employee_id IN ({placeholders})"
        sql += " ORDER BY applied_date DESC, leave_id DESC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_request(r) for r in fetchall(cur)]

    def list_approved(self, employee_aliases: Optional[Iterable[str]] = None) -> Sequence[LeaveInterval]:
        sql = "SELECT employee_id, start_date, end_date, status, is_paid FROM leave_requests WHERE status=%s"
        params: tuple = (LeaveStatus.APPROVED.value,)
        if employee_aliases is not None:
            placeholders, alias_params = in_clause(employee_aliases)
            sql += f" AND employee_id IN ({placeholders})"
            params += alias_params
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [
                LeaveInterval(
                    employee_id=r["employee_id"],
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    status=LeaveStatus(r["status"]),
                    is_paid=bool(r["is_paid"]),
                )
                for r in fetchall(cur)
            ]

    def find_overlapping(
        self,
        *,
        employee_aliases: Iterable[str],
        start_date: date,
        end_date: date,
    ) -> Optional[LeaveRequest]:
        placeholders, params = in_clause(employee_aliases)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE employee_id IN ({placeholders})
                  AND status<>%s
                  AND start_date<=%s AND end_date>=%s
                LIMIT 1
                """,
                (*params, LeaveStatus.REJECTED.value, end_date, start_date),
            )
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def update_decision(
        self,
        leave_id: int,
        *,
        status: Optional[LeaveStatus] = None,
        is_paid: Optional[bool] = None,
    ) -> bool:
        assignments: list[str] = []
        params: list = []
        if status is not None:
            assignments.append("status=%s")
            params.append(status.value)
        if is_paid is not None:
            assignments.append("is_paid=%s")
            params.append(1 if is_paid else 0)
        if not assignments:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE leave_requests SET {', '.join(assignments)} WHERE leave_id=%s",
                (*params, int(leave_id)),
            )
            return cur.rowcount > 0

    def delete(self, leave_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            return cur.rowcount > 0
