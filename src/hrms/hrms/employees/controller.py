from __future__ import annotations

from flask import Flask, request

from ..common.responses import api_errors, fail, ok
from ..container import Container
from ..users.auth import Guards


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @guards.auth_required
    @api_errors
    def list_employees(*, ctx):
        if ctx.is_admin:
            employees = container.employee_service.list_employees()
        else:
            employees = [container.employee_service.get(ctx.employee_id or "")]
        return ok([e.to_dict() for e in employees])

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @guards.admin_required
    @api_errors
    def create_employee(*, ctx):
        employee = container.employee_service.create(request.get_json(silent=True) or {})
        return ok(employee.to_dict(), message="Employee created", status=201)

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    @guards.auth_required
    @api_errors
    def get_employee(employee_id: str, *, ctx):
        employee = container.employee_service.get(employee_id)
        if not ctx.is_admin and not employee.identity().matches(ctx.employee_id):
            return fail("Forbidden", 403)
        return ok(employee.to_dict())

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    @guards.admin_required
    @api_errors
    def update_employee(employee_id: str, *, ctx):
        employee = container.employee_service.update(employee_id, request.get_json(silent=True) or {})
        return ok(employee.to_dict(), message="Employee updated")

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @guards.admin_required
    @api_errors
    def delete_employee(employee_id: str, *, ctx):
        container.employee_service.delete(employee_id)
        return ok(None, message="Employee deleted")
