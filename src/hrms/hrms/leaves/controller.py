from __future__ import annotations

from flask import Flask, request

from ..common.responses import api_errors, ok
from ..container import Container
from ..users.auth import Guards


def register(app: Flask, container: Container) -> None:
    guards = Guards(container.auth_service)

    @app.route("/api/leave-requests", methods=["GET"], endpoint="list_leave_requests")
    @guards.auth_required
    @api_errors
    def list_leave_requests(*, ctx):
        leaves = container.leave_service.list_for(ctx)
        return ok([lv.to_dict() for lv in leaves])

    @app.route("/api/leave-requests", methods=["POST"], endpoint="create_leave_request")
    @guards.auth_required
    @api_errors
    def create_leave_request(*, ctx):
        leave = container.leave_service.create(ctx, request.get_json(silent=True) or {})
        return ok(leave.to_dict(), message="Leave request submitted successfully", status=201)

    @app.route("/api/leave-requests/<int:leave_id>", methods=["PUT"], endpoint="update_leave_request")
    @guards.admin_required
    @api_errors
    def update_leave_request(leave_id: int, *, ctx):
        leave = container.leave_service.decide(ctx, leave_id, request.get_json(silent=True) or {})
        return ok(leave.to_dict(), message="Leave request updated successfully")

    @app.route("/api/leave-requests/<int:leave_id>", methods=["DELETE"], endpoint="delete_leave_request")
    @guards.auth_required
    @api_errors
    def delete_leave_request(leave_id: int, *, ctx):
        container.leave_service.delete(ctx, leave_id)
        return ok(None, message="Leave request deleted")
