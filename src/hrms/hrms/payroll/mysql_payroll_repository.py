from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import PayrollRecord, PayrollResult
from .repository import PayrollRepository


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, result: PayrollResult) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll_records
                    (employee_id, employee_name, base_salary, working_days, paid_leaves, unpaid_leaves,
                     deductions, final_salary, month, year, policy)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    employee_name=VALUES(employee_name),
                    base_salary=VALUES(base_salary),
                    working_days=VALUES(working_days),
                    paid_leaves=VALUES(paid_leaves),
                    unpaid_leaves=VALUES(unpaid_leaves),
                    deductions=VALUES(deductions),
                    final_salary=VALUES(final_salary),
                    policy=VALUES(policy),
                    payroll_id=LAST_INSERT_ID(payroll_id)
                """,
                (
                    result.employee_id,
                    result.employee_name,
                    result.base_salary,
                    result.total_working_days,
                    result.paid_leave_days,
                    result.unpaid_leave_days,
                    result.deductions,
                    result.final_salary,
                    result.month,
                    result.year,
                    result.policy.value,
                ),
            )
            return int(cur.lastrowid)

    def list_records(self, *, employee_aliases: Optional[Iterable[str]] = None) -> Sequence[PayrollRecord]:
        sql = """
            SELECT payroll_id, employee_id, employee_name, base_salary, working_days, paid_leaves,
                   unpaid_leaves, deductions, final_salary, month, year, policy
            FROM payroll_records
        """
        params: tuple = ()
        if employee_aliases is not None:
            placeholders, params = in_clause(employee_aliases)
            sql += f" WHERE employee_id IN ({placeholders})"
        sql += " ORDER BY year DESC, month DESC, employee_name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [
                PayrollRecord(
                    payroll_id=int(r["payroll_id"]),
                    employee_id=r["employee_id"],
                    employee_name=r["employee_name"],
                    base_salary=Decimal(r["base_salary"]),
                    working_days=int(r["working_days"]),
                    paid_leaves=int(r["paid_leaves"]),
                    unpaid_leaves=int(r["unpaid_leaves"]),
                    deductions=Decimal(r["deductions"]),
                    final_salary=Decimal(r["final_salary"]),
                    month=int(r["month"]),
                    year=int(r["year"]),
                    policy=r["policy"],
                )
                for r in fetchall(cur)
            ]
