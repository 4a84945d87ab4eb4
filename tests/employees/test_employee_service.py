from __future__ import annotations

from decimal import Decimal

import pytest
from werkzeug.security import check_password_hash

from src.hrms.hrms.core.enums import Role
from src.hrms.hrms.core.exceptions import ConflictError, NotFoundError, ValidationError
from tests.fakes import make_container, make_employee


@pytest.fixture
def container():
    return make_container([make_employee("EMP001", row_id=1, employee_code="E-0001")])


def _payload(**overrides):
    data = {
        "id": "EMP010",
        "name": "Carol",
        "email": "Carol@Example.com",
        "username": "carol",
        "password": "secret1",
        "department": "Finance",
        "position": "Analyst",
        "salary": "18000",
        "joining_date": "2025-01-06",
    }
    data.update(overrides)
    return data


def test_create_employee_and_login(container):
    employee = container.employee_service.create(_payload())

    assert employee.employee_id == "EMP010"
    assert employee.email == "carol@example.com"
    assert employee.salary == Decimal("18000")

    user = container.users_repo.get_by_username("carol")
    assert user.role == Role.EMPLOYEE
    assert user.employee_id == "EMP010"
    assert check_password_hash(user.password_hash, "secret1")


@pytest.mark.parametrize(
    "overrides",
    [{"salary": "-5"}, {"salary": "abc"}, {"name": ""}, {"password": "123"}, {"joining_date": "06-01-2025"}],
)
def test_create_rejects_invalid_input(container, overrides):
    with pytest.raises(ValidationError):
        container.employee_service.create(_payload(**overrides))


@pytest.mark.parametrize(
    "overrides",
    [{"id": "EMP001"}, {"employee_code": "E-0001"}, {"username": "emp001"}, {"email": "emp001@example.com"}],
)
def test_create_rejects_duplicates(container, overrides):
    with pytest.raises(ConflictError):
        container.employee_service.create(_payload(**overrides))


def test_get_by_any_alias(container):
    assert container.employee_service.get("E-0001").employee_id == "EMP001"
    assert container.employee_service.get("1").employee_id == "EMP001"
    with pytest.raises(NotFoundError):
        container.employee_service.get("missing")


def test_update_changes_fields_but_not_username(container):
    updated = container.employee_service.update("EMP001", {"salary": 20000, "position": "Lead", "username": "x"})
    assert updated.salary == Decimal("20000")
    assert updated.position == "Lead"
    assert updated.username == "emp001"


def test_update_with_nothing_to_change(container):
    with pytest.raises(ValidationError):
        container.employee_service.update("EMP001", {"username": "x"})


def test_delete_removes_login(container):
    container.employee_service.create(_payload())
    container.employee_service.delete("EMP010")

    assert container.users_repo.get_by_username("carol") is None
    with pytest.raises(NotFoundError):
        container.employee_service.get("EMP010")


def test_resolve_identity_includes_aliases(container):
    identity = container.employee_service.resolve_identity("E-0001")
    assert identity.primary_id == "EMP001"
    assert identity.aliases == frozenset({"EMP001", "E-0001", "1"})
