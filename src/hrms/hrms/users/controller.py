from __future__ import annotations

from flask import Flask, request

from ..common.responses import api_errors, ok
from ..container import Container
from .auth import bearer_token


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    @api_errors
    def login():
        body = request.get_json(silent=True) or {}
        issued = container.auth_service.authenticate(body.get("username", ""), body.get("password", ""))
        return ok({"token": issued.token, "user": issued.user.to_dict()}, message="Login successful")

    @app.route("/api/auth/verify", methods=["POST"], endpoint="auth_verify")
    @api_errors
    def verify():
        body = request.get_json(silent=True) or {}
        ctx = container.auth_service.verify(body.get("token") or bearer_token() or "")
        return ok({"user": ctx.to_dict()})

    @app.route("/api/auth/refresh", methods=["POST"], endpoint="auth_refresh")
    @api_errors
    def refresh():
        body = request.get_json(silent=True) or {}
        issued = container.auth_service.refresh(body.get("token") or bearer_token() or "")
        return ok({"token": issued.token, "user": issued.user.to_dict()})
