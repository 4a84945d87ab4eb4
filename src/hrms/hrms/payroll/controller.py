from __future__ import annotations

import logging

from flask import Flask, request, send_file

from ..common.datetime_utils import now_local
from ..common.responses import api_errors, ok
from ..container import Container
from ..users.auth import Guards
from .export import XLSX_MIMETYPE, payslip_filename, render_payslip, report_csv, report_filename, report_xlsx

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)

    def _period(source) -> tuple:
        # current period only when a value is absent; anything else goes to parse_period
        today = now_local()
        month = source.get("month") if source.get("month", "") != "" else today.month
        year = source.get("year") if source.get("year", "") != "" else today.year
        return month, year

    def _attachment(body, *, filename: str, mimetype: str):
        resp = app.response_class(body, mimetype=mimetype)
        resp.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
        return resp

    @app.route("/api/payroll", methods=["GET"], endpoint="list_payroll_records")
    @guards.auth_required
    @api_errors
    def list_payroll_records(*, ctx):
        records = container.payroll_service.list_records(ctx)
        return ok([r.to_dict() for r in records])

    @app.route("/api/payroll", methods=["POST"], endpoint="save_payroll")
    @guards.admin_required
    @api_errors
    def save_payroll(*, ctx):
        month, year = _period(request.get_json(silent=True) or {})
        records = container.payroll_service.save_report(ctx, month, year)
        return ok([r.to_dict() for r in records], message="Payroll saved", status=201)

    @app.route("/api/payroll/report", methods=["GET"], endpoint="payroll_report")
    @guards.admin_required
    @api_errors
    def payroll_report(*, ctx):
        month, year = _period(request.args)
        report = container.payroll_service.generate_report(month, year)
        return ok(report.to_dict())

    @app.route("/api/payroll/report.csv", methods=["GET"], endpoint="payroll_report_csv")
    @guards.admin_required
    @api_errors
    def payroll_report_csv(*, ctx):
        month, year = _period(request.args)
        report = container.payroll_service.generate_report(month, year)
        logger.info("CSV payroll export %04d-%02d by %s", report.year, report.month, ctx.username)
        return _attachment(
            report_csv(report),
            filename=report_filename(report, "csv"),
            mimetype="text/csv; charset=utf-8",
        )

    @app.route("/api/payroll/report.xlsx", methods=["GET"], endpoint="payroll_report_xlsx")
    @guards.admin_required
    @api_errors
    def payroll_report_xlsx(*, ctx):
        month, year = _period(request.args)
        report = container.payroll_service.generate_report(month, year)
        logger.info("XLSX payroll export %04d-%02d by %s", report.year, report.month, ctx.username)
        return send_file(
            report_xlsx(report),
            download_name=report_filename(report, "xlsx"),
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )

    @app.route("/api/payroll/payslip/<employee_id>", methods=["GET"], endpoint="payslip")
    @guards.auth_required
    @api_errors
    def payslip(employee_id: str, *, ctx):
        month, year = _period(request.args)
        employee, result = container.payroll_service.payslip(ctx, month, year, employee_id=employee_id)
        if request.args.get("format") == "json":
            return ok(result.to_dict())
        return _attachment(
            render_payslip(employee, result),
            filename=payslip_filename(employee, result),
            mimetype="text/plain; charset=utf-8",
        )
