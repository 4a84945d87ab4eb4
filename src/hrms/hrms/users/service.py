from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError
from .model import AuthContext, User
from .repository import UserRepository
from .tokens import TokenManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedToken:
    token: str
    user: AuthContext


class AuthService:
    """Use case: log in, verify and refresh bearer tokens."""

    def __init__(self, users: UserRepository, tokens: TokenManager):
        self._users = users
        self._tokens = tokens

    @staticmethod
    def _context_for(user: User) -> AuthContext:
        return AuthContext(
            user_id=user.user_id,
            username=user.username,
            role=user.role,
            employee_id=user.employee_id,
            name=user.name,
        )

    def authenticate(self, username: str, password: str) -> IssuedToken:
        username = require_non_empty(username, "Username")
        user = self._users.get_by_username(username)
        if not user or not user.is_active:
            logger.info("Login rejected for unknown or inactive user %r", username)
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            ok = False
        if not ok:
            logger.info("Login rejected for %r: bad password", username)
            raise AuthenticationError("Invalid username or password")

        ctx = self._context_for(user)
        return IssuedToken(token=self._tokens.issue(ctx), user=ctx)

    def verify(self, token: str) -> AuthContext:
        if not token:
            raise AuthenticationError("Missing token")
        return self._tokens.verify(token)

    def refresh(self, token: str) -> IssuedToken:
        if not token:
            raise AuthenticationError("Missing token")
        claimed = self._tokens.verify_for_refresh(token)
        user = self._users.get_by_id(claimed.user_id)
        if not user or not user.is_active:
            raise AuthenticationError("Account no longer active")
        ctx = self._context_for(user)
        return IssuedToken(token=self._tokens.issue(ctx), user=ctx)
