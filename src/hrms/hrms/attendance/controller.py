from __future__ import annotations

from flask import Flask, request

from ..common.responses import api_errors, ok
from ..container import Container
from ..users.auth import Guards


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)

    def _body() -> dict:
        return request.get_json(silent=True) or {}

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @guards.auth_required
    @api_errors
    def list_attendance(*, ctx):
        records = container.attendance_service.list_for(ctx, employee_id=request.args.get("employee_id"))
        return ok([r.to_dict() for r in records])

    @app.route("/api/attendance", methods=["POST"], endpoint="check_in")
    @guards.auth_required
    @api_errors
    def check_in(*, ctx):
        record = container.attendance_service.check_in(ctx, location=_body().get("location", ""))
        return ok(record.to_dict(), message="Attendance marked successfully", status=201)

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="check_out")
    @guards.auth_required
    @api_errors
    def check_out(*, ctx):
        record = container.attendance_service.check_out(ctx)
        return ok(record.to_dict(), message="Checked out successfully")

    @app.route("/api/attendance/manual", methods=["POST"], endpoint="manual_attendance")
    @guards.admin_required
    @api_errors
    def manual_attendance(*, ctx):
        record = container.attendance_service.manual_entry(ctx, _body())
        return ok(record.to_dict(), message="Attendance recorded", status=201)

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT"], endpoint="update_attendance")
    @guards.admin_required
    @api_errors
    def update_attendance(attendance_id: int, *, ctx):
        record = container.attendance_service.admin_update(ctx, attendance_id, _body())
        return ok(record.to_dict(), message="Attendance updated")

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="delete_attendance")
    @guards.admin_required
    @api_errors
    def delete_attendance(attendance_id: int, *, ctx):
        container.attendance_service.delete(ctx, attendance_id)
        return ok(None, message="Attendance deleted")

    @app.route("/api/attendance/<int:attendance_id>/break", methods=["POST"], endpoint="start_break")
    @guards.auth_required
    @api_errors
    def start_break(attendance_id: int, *, ctx):
        record = container.attendance_service.start_break(ctx, attendance_id, _body().get("start_time", ""))
        return ok(record.to_dict(), message="Break started successfully")

    @app.route("/api/attendance/<int:attendance_id>/break", methods=["PATCH"], endpoint="end_break")
    @guards.auth_required
    @api_errors
    def end_break(attendance_id: int, *, ctx):
        record = container.attendance_service.end_break(ctx, attendance_id, _body().get("end_time", ""))
        return ok(record.to_dict(), message="Break ended successfully")
