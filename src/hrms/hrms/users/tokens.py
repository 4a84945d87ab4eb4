"""Bearer token issuing and verification (PyJWT, HS256)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.constants import DEFAULT_REFRESH_WINDOW_MINUTES, DEFAULT_TOKEN_MINUTES
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import AuthContext

ALGORITHM = "HS256"


class TokenManager:
    def __init__(
        self,
        secret: str,
        *,
        expires_minutes: int = DEFAULT_TOKEN_MINUTES,
        refresh_window_minutes: int = DEFAULT_REFRESH_WINDOW_MINUTES,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._expires = timedelta(minutes=int(expires_minutes))
        self._refresh_window = timedelta(minutes=int(refresh_window_minutes))

    def issue(self, ctx: AuthContext, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(ctx.user_id),
            "username": ctx.username,
            "role": ctx.role.value,
            "employee_id": ctx.employee_id,
            "name": ctx.name,
            "iat": now,
            "exp": now + self._expires,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def _decode(self, token: str, *, verify_exp: bool) -> dict:
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": verify_exp, "require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")

    @staticmethod
    def _to_context(payload: dict) -> AuthContext:
        try:
            return AuthContext(
                user_id=int(payload["sub"]),
                username=str(payload.get("username") or ""),
                role=Role(payload.get("role")),
                employee_id=payload.get("employee_id"),
                name=payload.get("name"),
            )
        except (ValueError, TypeError):
            raise AuthenticationError("Invalid token")

    def verify(self, token: str) -> AuthContext:
        return self._to_context(self._decode(token, verify_exp=True))

    def verify_for_refresh(self, token: str, *, now: Optional[datetime] = None) -> AuthContext:
        """Accept a token that expired less than the refresh window ago."""
        payload = self._decode(token, verify_exp=False)
        now = now or datetime.now(timezone.utc)
        expired_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        if now - expired_at > self._refresh_window:
            raise AuthenticationError("Token too old to refresh")
        return self._to_context(payload)
