"""Request-scoped authentication for the JSON API.

Views wrapped by these guards receive the caller as a ``ctx`` keyword
argument; nothing is stashed in module or browser-side globals.
"""

from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import request

from ..common.responses import fail
from ..core.exceptions import AuthenticationError
from .service import AuthService


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


class Guards:
    def __init__(self, auth_service: AuthService):
        self._auth = auth_service

    def _context(self):
        token = bearer_token()
        if not token:
            raise AuthenticationError("Unauthorized")
        return self._auth.verify(token)

    def auth_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                ctx = self._context()
            except AuthenticationError as e:
                return fail(str(e), 401)
            return view(*args, ctx=ctx, **kwargs)

        return wrapper

    def admin_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                ctx = self._context()
            except AuthenticationError as e:
                return fail(str(e), 401)
            if not ctx.is_admin:
                return fail("Admin access required", 403)
            return view(*args, ctx=ctx, **kwargs)

        return wrapper
