"""Example: compute a month's payroll through the service layer (no Flask).

Controllers stay thin; the calculation lives in the payroll package.
"""

import importlib

from config import get_settings_module

from src.hrms.hrms.container import build_container
from src.hrms.hrms.payroll.export import report_rows


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    report = container.payroll_service.generate_report(2, 2025)
    for row in report_rows(report.rows):
        print(row)
    print("Total payroll:", report.total_payroll)


if __name__ == "__main__":
    main()
