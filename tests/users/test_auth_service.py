from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.hrms.hrms.core.enums import Role
from src.hrms.hrms.core.exceptions import AuthenticationError
from src.hrms.hrms.users.model import AuthContext
from src.hrms.hrms.users.service import AuthService
from src.hrms.hrms.users.tokens import TokenManager
from tests.fakes import FakeUsers

SECRET = "unit-test-secret"


@pytest.fixture
def tokens():
    return TokenManager(SECRET, expires_minutes=30, refresh_window_minutes=60)


@pytest.fixture
def users():
    repo = FakeUsers()
    repo.add("admin", "admin123", Role.ADMIN, name="Administrator")
    repo.add("alice", "alice123", Role.EMPLOYEE, employee_id="EMP001", name="Alice")
    repo.add("gone", "gone1234", Role.EMPLOYEE, employee_id="EMP009", is_active=False)
    return repo


@pytest.fixture
def auth(users, tokens):
    return AuthService(users, tokens)


def test_login_issues_token_with_claims(auth):
    issued = auth.authenticate("alice", "alice123")

    assert issued.user.role == Role.EMPLOYEE
    claims = jwt.decode(issued.token, SECRET, algorithms=["HS256"])
    assert claims["sub"] == str(issued.user.user_id)
    assert claims["employee_id"] == "EMP001"
    assert claims["role"] == "employee"


@pytest.mark.parametrize("username, password", [("alice", "wrong"), ("nobody", "x"), ("gone", "gone1234")])
def test_login_rejected(auth, username, password):
    with pytest.raises(AuthenticationError):
        auth.authenticate(username, password)


def test_verify_round_trip(auth):
    issued = auth.authenticate("admin", "admin123")
    ctx = auth.verify(issued.token)
    assert ctx.is_admin
    assert ctx.username == "admin"


@pytest.mark.parametrize("token", ["", "not-a-jwt"])
def test_verify_rejects_garbage(auth, token):
    with pytest.raises(AuthenticationError):
        auth.verify(token)


def test_verify_rejects_foreign_signature(auth):
    ctx = AuthContext(user_id=1, username="admin", role=Role.ADMIN)
    forged = TokenManager("another-secret").issue(ctx)
    with pytest.raises(AuthenticationError):
        auth.verify(forged)


def test_expired_token_rejected_but_refreshable(auth, users, tokens):
    user = users.get_by_username("alice")
    ctx = AuthContext(user_id=user.user_id, username="alice", role=Role.EMPLOYEE, employee_id="EMP001")
    stale = tokens.issue(ctx, now=datetime.now(timezone.utc) - timedelta(minutes=45))

    with pytest.raises(AuthenticationError):
        auth.verify(stale)

    refreshed = auth.refresh(stale)
    assert auth.verify(refreshed.token).employee_id == "EMP001"


def test_refresh_window_enforced(tokens):
    ctx = AuthContext(user_id=2, username="alice", role=Role.EMPLOYEE)
    issued_at = datetime(2025, 1, 1, 8, 0, tzinfo=timezone.utc)
    token = tokens.issue(ctx, now=issued_at)

    # expires 08:30, window is 60 minutes
    assert tokens.verify_for_refresh(token, now=issued_at + timedelta(minutes=80)).user_id == 2
    with pytest.raises(AuthenticationError):
        tokens.verify_for_refresh(token, now=issued_at + timedelta(minutes=95))


def test_refresh_rejected_for_deactivated_user(auth, users, tokens):
    gone = users.get_by_username("gone")
    ctx = AuthContext(user_id=gone.user_id, username="gone", role=Role.EMPLOYEE)
    with pytest.raises(AuthenticationError):
        auth.refresh(tokens.issue(ctx))


def test_empty_secret_not_allowed():
    with pytest.raises(ValueError):
        TokenManager("")
