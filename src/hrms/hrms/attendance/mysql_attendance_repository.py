from __future__ import annotations

from collections import defaultdict
from datetime import date, time
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, normalize_mysql_time
from .model import AttendanceRecord, BreakPeriod
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, employee_id, employee_name, work_date, login_time, logout_time, total_hours, is_late, location"


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, cur, where: str = "", params: tuple = ()) -> list[AttendanceRecord]:
        cur.execute(
            f"SELECT {_COLUMNS} FROM attendance {where} ORDER BY work_date DESC, attendance_id DESC",
            params,
        )
        rows = fetchall(cur)
        if not rows:
            return []

        placeholders, ids = in_clause(int(r["attendance_id"]) for r in rows)
        cur.execute(
            f"""
            SELECT break_id, attendance_id, start_time, end_time, duration_min
            FROM attendance_breaks
            WHERE attendance_id IN ({placeholders})
            ORDER BY break_id
            """,
            ids,
        )
        breaks: dict[int, list[BreakPeriod]] = defaultdict(list)
        for b in fetchall(cur):
            breaks[int(b["attendance_id"])].append(
                BreakPeriod(
                    break_id=int(b["break_id"]),
                    start_time=normalize_mysql_time(b["start_time"]),
                    end_time=normalize_mysql_time(b.get("end_time")),
                    duration_minutes=b.get("duration_min"),
                )
            )

        return [
            AttendanceRecord(
                attendance_id=int(r["attendance_id"]),
                employee_id=r["employee_id"],
                employee_name=r["employee_name"],
                work_date=r["work_date"],
                login_time=normalize_mysql_time(r["login_time"]),
                logout_time=normalize_mysql_time(r.get("logout_time")),
                total_hours=Decimal(r.get("total_hours") or 0),
                is_late=bool(r.get("is_late")),
                location=r.get("location") or "",
                breaks=tuple(breaks.get(int(r["attendance_id"]), ())),
            )
            for r in rows
        ]

    def get(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            found = self._load(cur, "WHERE attendance_id=%s", (int(attendance_id),))
            return found[0] if found else None

    def get_for_employee_and_date(self, employee_aliases: Iterable[str], work_date: date) -> Optional[AttendanceRecord]:
        placeholders, params = in_clause(employee_aliases)
        with db_cursor(self._conn_factory) as (_, cur):
            found = self._load(
                cur,
                f"WHERE employee_id IN ({placeholders}) AND work_date=%s",
                (*params, work_date),
            )
            return found[0] if found else None

    def list_records(self, *, employee_aliases: Optional[Iterable[str]] = None) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            if employee_aliases is None:
                return self._load(cur)
            placeholders, params = in_clause(employee_aliases)
            return self._load(cur, f"WHERE employee_id IN ({placeholders})", params)

    def create(
        self,
        *,
        employee_id: str,
        employee_name: str,
        work_date: date,
        login_time: time,
        logout_time: Optional[time],
        total_hours: Decimal,
        is_late: bool,
        location: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance
                    (employee_id, employee_name, work_date, login_time, logout_time, total_hours, is_late, location)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (employee_id, employee_name, work_date, login_time, logout_time, total_hours,
                 1 if is_late else 0, location),
            )
            return int(cur.lastrowid)

    def update(
        self,
        attendance_id: int,
        *,
        login_time: time,
        logout_time: Optional[time],
        total_hours: Decimal,
        is_late: bool,
        location: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET login_time=%s, logout_time=%s, total_hours=%s, is_late=%s, location=%s
                WHERE attendance_id=%s
                """,
                (login_time, logout_time, total_hours, 1 if is_late else 0, location, int(attendance_id)),
            )
            return cur.rowcount > 0

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0

    def start_break(self, attendance_id: int, start_time: time) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO attendance_breaks (attendance_id, start_time) VALUES (%s,%s)",
                (int(attendance_id), start_time),
            )
            return int(cur.lastrowid)

    def end_break(self, break_id: int, end_time: time, duration_minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_breaks SET end_time=%s, duration_min=%s WHERE break_id=%s AND end_time IS NULL",
                (end_time, int(duration_minutes), int(break_id)),
            )
            return cur.rowcount > 0
