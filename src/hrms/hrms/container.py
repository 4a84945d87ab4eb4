from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_LATE_AFTER, DEFAULT_REFRESH_WINDOW_MINUTES, DEFAULT_TOKEN_MINUTES
from .core.enums import PayrollPolicy
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeDirectory
from .employees.service import EmployeeService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveLedger
from .leaves.service import LeaveService
from .payroll.calculator.factory import policy_for
from .payroll.calculator.payroll_calculator import PayrollCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService
from .users.tokens import TokenManager


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    employees_repo: EmployeeDirectory
    leaves_repo: LeaveLedger
    attendance_repo: AttendanceRepository
    payroll_repo: PayrollRepository

    tokens: TokenManager
    auth_service: AuthService
    employee_service: EmployeeService
    leave_service: LeaveService
    attendance_service: AttendanceService
    payroll_service: PayrollService


def build_services(
    *,
    users_repo: UserRepository,
    employees_repo: EmployeeDirectory,
    leaves_repo: LeaveLedger,
    attendance_repo: AttendanceRepository,
    payroll_repo: PayrollRepository,
    settings: Any = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories.

    ``settings`` is a config module (or any object) read with getattr so
    missing values fall back to defaults.
    """

    tokens = TokenManager(
        str(getattr(settings, "JWT_SECRET", "") or getattr(settings, "SECRET_KEY", "")),
        expires_minutes=int(getattr(settings, "JWT_EXPIRES_MINUTES", DEFAULT_TOKEN_MINUTES)),
        refresh_window_minutes=int(
            getattr(settings, "JWT_REFRESH_WINDOW_MINUTES", DEFAULT_REFRESH_WINDOW_MINUTES)
        ),
    )
    calculator = PayrollCalculator(
        policy_for(getattr(settings, "PAYROLL_POLICY", PayrollPolicy.SIX_DAY_WEEK.value))
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        employees_repo=employees_repo,
        leaves_repo=leaves_repo,
        attendance_repo=attendance_repo,
        payroll_repo=payroll_repo,
        tokens=tokens,
        auth_service=AuthService(users_repo, tokens),
        employee_service=EmployeeService(employees_repo, users_repo),
        leave_service=LeaveService(leaves_repo, employees_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            employees_repo,
            late_after=getattr(settings, "LATE_AFTER", DEFAULT_LATE_AFTER),
        ),
        payroll_service=PayrollService(employees_repo, leaves_repo, payroll_repo, calculator=calculator),
    )


def build_container(*, db_config: dict, settings: Any) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        settings=settings,
        conn=conn,
    )
