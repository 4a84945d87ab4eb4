"""Rendering of payroll results: CSV, XLSX and plain-text payslips.

Calculation lives in the calculator; this module only formats.
"""

from __future__ import annotations

import calendar
import csv
import io
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

import pandas as pd

from ..core.enums import PayrollPolicy
from ..employees.model import Employee
from .model import CENT, PayrollReport, PayrollResult

REPORT_COLUMNS = [
    "Employee",
    "Base Salary",
    "Working Days",
    "Actual Days",
    "Paid Leaves",
    "Unpaid Leaves",
    "Rest Days",
    "Per Day Salary",
    "Deductions",
    "Final Salary",
]

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_RULE = "=" * 60
_THIN = "-" * 60


def _money(value: Decimal, *, cents: bool = False) -> str:
    if cents:
        return f"{value.quantize(CENT, rounding=ROUND_HALF_UP):,.2f}"
    return f"{value:,.0f}"


def report_rows(rows: Iterable[PayrollResult]) -> list[dict]:
    return [
        {
            "Employee": r.employee_name,
            "Base Salary": str(r.base_salary),
            "Working Days": r.total_working_days,
            "Actual Days": r.actual_working_days,
            "Paid Leaves": r.paid_leave_days,
            "Unpaid Leaves": r.unpaid_leave_days,
            "Rest Days": r.rest_days,
            "Per Day Salary": str(r.per_day_salary.quantize(CENT, rounding=ROUND_HALF_UP)),
            "Deductions": str(r.deductions),
            "Final Salary": str(r.final_salary),
        }
        for r in rows
    ]


def report_csv(report: PayrollReport) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=REPORT_COLUMNS)
    writer.writeheader()
    for row in report_rows(report.rows):
        writer.writerow(row)
    # Excel-friendly UTF-8
    return out.getvalue().encode("utf-8-sig")


def report_xlsx(report: PayrollReport) -> io.BytesIO:
    df = pd.DataFrame(report_rows(report.rows), columns=REPORT_COLUMNS)
    numeric = [c for c in REPORT_COLUMNS if c != "Employee"]
    df[numeric] = df[numeric].apply(pd.to_numeric)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=f"Payroll {report.year}-{report.month:02d}")
    output.seek(0)
    return output


def report_filename(report: PayrollReport, ext: str) -> str:
    return f"monthly_payroll_{report.month}_{report.year}.{ext}"


def payslip_filename(employee: Employee, result: PayrollResult) -> str:
    return f"payslip_{'_'.join(employee.name.split())}_{result.month}_{result.year}.txt"


def _policy_notes(policy: PayrollPolicy) -> list[str]:
    if policy == PayrollPolicy.SIX_DAY_WEEK:
        return [
            "* Sundays are weekly holidays and are not counted as working days",
            "* Working Days = Total Days - Sundays",
        ]
    return ["* Every month is treated as 30 working days"]


def render_payslip(employee: Employee, result: PayrollResult, *, generated: Optional[date] = None) -> str:
    generated = generated or date.today()
    days_in_month = calendar.monthrange(result.year, result.month)[1]
    per_day = _money(result.per_day_salary, cents=True)
    base = _money(result.base_salary)
    heading = "6-DAY WORK WEEK" if result.policy == PayrollPolicy.SIX_DAY_WEEK else "30-DAY MONTH"

    def line(label: str, value: str) -> str:
        return f"{label:<38}{value}"

    lines = [
        _RULE,
        "PAYSLIP".center(60),
        _RULE,
        f"Period: {calendar.month_name[result.month]} {result.year}",
        f"Generated: {generated.isoformat()}",
        "",
        _THIN,
        "EMPLOYEE DETAILS",
        _THIN,
        f"Name:        {employee.name}",
        f"Department:  {employee.department}",
        f"Position:    {employee.position}",
        f"Employee ID: {employee.employee_id}",
        "",
        _THIN,
        "EARNINGS",
        _THIN,
        line("Base Monthly Salary:", base),
        "",
        _THIN,
        f"ATTENDANCE SUMMARY ({heading})",
        _THIN,
        line("Total Days in Month:", f"{days_in_month} days"),
        line("Rest Days:", f"{result.rest_days} days"),
        line("Total Working Days:", f"{result.total_working_days} days"),
        line("Paid Leaves Taken:", f"{result.paid_leave_days} days"),
        line("Unpaid Leaves Taken:", f"{result.unpaid_leave_days} days"),
        line("Actual Working Days:", f"{result.actual_working_days} days"),
        "",
        line("Per Day Salary:", per_day),
        f"(Monthly Salary / Working Days = {base} / {result.total_working_days})",
        "",
        _THIN,
        "DEDUCTIONS",
        _THIN,
        "Unpaid Leave Deduction:",
        f"  {result.unpaid_leave_days} days x {per_day} = {_money(result.deductions)}",
        "",
        _RULE,
        line("NET SALARY:", _money(result.final_salary)),
        _RULE,
        "",
        "Calculation: Base Salary - Deductions",
        f"  {base} - {_money(result.deductions)} = {_money(result.final_salary)}",
        "",
        _THIN,
        "NOTES:",
        *_policy_notes(result.policy),
        "* Paid leaves do not affect salary",
        "* Only unpaid leaves result in deductions",
        _THIN,
        "This is a computer generated payslip and does not require signature.",
    ]
    return "\n".join(lines) + "\n"
