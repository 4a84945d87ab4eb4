from __future__ import annotations

import io
from datetime import date

import pandas as pd
import pytest

from src.hrms.hrms.payroll.export import (
    REPORT_COLUMNS,
    payslip_filename,
    render_payslip,
    report_csv,
    report_filename,
    report_xlsx,
)
from tests.fakes import make_container, make_employee


@pytest.fixture
def alice():
    return make_employee("EMP001", salary="12000", name="Alice Smith")


@pytest.fixture
def report(alice):
    c = make_container([alice])
    c.leaves_repo.add("EMP001", date(2025, 2, 3), date(2025, 2, 4))
    return c.payroll_service.generate_report(2, 2025)


def test_csv_has_header_and_one_row_per_employee(report):
    raw = report_csv(report)
    assert raw.startswith(b"\xef\xbb\xbf")

    lines = raw.decode("utf-8-sig").splitlines()
    assert lines[0].split(",") == REPORT_COLUMNS
    assert lines[1].split(",") == ["Alice Smith", "12000", "24", "22", "0", "2", "4", "500.00", "1000", "11000"]


def test_xlsx_round_trips_through_pandas(report):
    df = pd.read_excel(io.BytesIO(report_xlsx(report).getvalue()), engine="openpyxl")
    assert list(df.columns) == REPORT_COLUMNS
    assert df.loc[0, "Employee"] == "Alice Smith"
    assert df.loc[0, "Final Salary"] == 11000


def test_payslip_text(report, alice):
    text = render_payslip(alice, report.rows[0], generated=date(2025, 3, 1))

    assert "PAYSLIP" in text
    assert "Period: February 2025" in text
    assert "Generated: 2025-03-01" in text
    assert "Employee ID: EMP001" in text
    assert "2 days x 500.00 = 1,000" in text
    assert "NET SALARY:" in text and "11,000" in text
    assert "Sundays are weekly holidays" in text


def test_filenames(report, alice):
    assert report_filename(report, "csv") == "monthly_payroll_2_2025.csv"
    assert payslip_filename(alice, report.rows[0]) == "payslip_Alice_Smith_2_2025.txt"
