"""JSON envelope helpers shared by the API controllers."""

from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    PayrollComputationError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (PayrollComputationError, 422),
    (ValidationError, 400),
)


def ok(data=None, *, message: str | None = None, status: int = 200):
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 400


def api_errors(view):
    """Translate domain errors into the JSON envelope; log anything else."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return fail(str(e), status_for(e))
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return fail("Server error", 500)

    return wrapper
