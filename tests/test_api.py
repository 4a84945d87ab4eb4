from __future__ import annotations

from datetime import date, datetime

import pytest

from src.hrms.hrms.core.enums import Role
from src.hrms.hrms.main import create_app
from src.hrms.hrms.payroll import controller as payroll_controller
from tests.fakes import ADMIN, employee_ctx, make_container, make_employee

ALICE = make_employee("EMP001", row_id=1, salary="12000", name="Alice Smith")
BOB = make_employee("EMP002", row_id=2, salary="24000", name="Bob")


@pytest.fixture
def container():
    c = make_container([ALICE, BOB])
    c.users_repo.add("admin", "admin123", Role.ADMIN, name="Administrator")
    c.users_repo.add("emp001", "alice123", Role.EMPLOYEE, employee_id="EMP001", name="Alice Smith")
    c.leaves_repo.add("EMP001", date(2025, 2, 3), date(2025, 2, 4))
    return c


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()


def _auth(container, ctx):
    return {"Authorization": f"Bearer {container.tokens.issue(ctx)}"}


@pytest.fixture
def admin_headers(container):
    return _auth(container, ADMIN)


@pytest.fixture
def alice_headers(container):
    return _auth(container, employee_ctx(ALICE))


def test_login_and_verify(client):
    resp = client.post("/api/auth/login", json={"username": "emp001", "password": "alice123"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    token = body["data"]["token"]

    resp = client.post("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})
    assert resp.get_json()["data"]["user"]["employee_id"] == "EMP001"


def test_login_with_bad_password(client):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Invalid username or password"}


def test_missing_token_is_401(client):
    resp = client.get("/api/payroll/report?month=2&year=2025")
    assert resp.status_code == 401


def test_admin_report(client, admin_headers):
    resp = client.get("/api/payroll/report?month=2&year=2025", headers=admin_headers)
    assert resp.status_code == 200

    data = resp.get_json()["data"]
    assert data["policy"] == "six_day_week"
    rows = {r["employee_id"]: r for r in data["rows"]}
    assert rows["EMP001"]["final_salary"] == 11000
    assert rows["EMP001"]["per_day_salary"] == 500
    assert rows["EMP002"]["deductions"] == 0
    assert data["total_payroll"] == 35000


def test_report_is_admin_only(client, alice_headers):
    resp = client.get("/api/payroll/report?month=2&year=2025", headers=alice_headers)
    assert resp.status_code == 403


def test_report_rejects_bad_month(client, admin_headers):
    resp = client.get("/api/payroll/report?month=13&year=2025", headers=admin_headers)
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_report_csv_download(client, admin_headers):
    resp = client.get("/api/payroll/report.csv?month=2&year=2025", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "monthly_payroll_2_2025.csv" in resp.headers["Content-Disposition"]
    assert b"Alice Smith,12000,24,22,0,2,4,500.00,1000,11000" in resp.data


def test_report_xlsx_download(client, admin_headers):
    resp = client.get("/api/payroll/report.xlsx?month=2&year=2025", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.data[:2] == b"PK"


def test_employee_payslip(client, alice_headers):
    resp = client.get("/api/payroll/payslip/EMP001?month=2&year=2025", headers=alice_headers)
    assert resp.status_code == 200
    assert resp.mimetype == "text/plain"
    assert "NET SALARY" in resp.get_data(as_text=True)

    resp = client.get("/api/payroll/payslip/EMP001?month=2&year=2025&format=json", headers=alice_headers)
    assert resp.get_json()["data"]["final_salary"] == 11000


def test_employee_cannot_read_other_payslip(client, alice_headers):
    resp = client.get("/api/payroll/payslip/EMP002?month=2&year=2025", headers=alice_headers)
    assert resp.status_code == 403


def test_save_and_list_payroll(client, admin_headers, alice_headers):
    resp = client.post("/api/payroll", json={"month": 2, "year": 2025}, headers=admin_headers)
    assert resp.status_code == 201
    assert len(resp.get_json()["data"]) == 2

    resp = client.get("/api/payroll", headers=alice_headers)
    records = resp.get_json()["data"]
    assert [r["employee_id"] for r in records] == ["EMP001"]


def test_leave_request_lifecycle(client, admin_headers, alice_headers):
    payload = {"leave_type": "Sick Leave", "start_date": "2025-02-10", "end_date": "2025-02-11", "reason": "Flu"}
    resp = client.post("/api/leave-requests", json=payload, headers=alice_headers)
    assert resp.status_code == 201
    leave_id = resp.get_json()["data"]["id"]

    resp = client.post("/api/leave-requests", json=payload, headers=alice_headers)
    assert resp.status_code == 400

    resp = client.post("/api/leave-requests", json=payload, headers=admin_headers)
    assert resp.status_code == 403

    resp = client.put(f"/api/leave-requests/{leave_id}", json={"status": "approved", "isPaid": True}, headers=admin_headers)
    assert resp.get_json()["data"]["is_paid"] is True

    resp = client.get("/api/payroll/payslip/EMP001?month=2&year=2025&format=json", headers=alice_headers)
    data = resp.get_json()["data"]
    assert (data["paid_leave_days"], data["unpaid_leave_days"]) == (2, 2)
    assert data["final_salary"] == 11000


def test_employee_listing_is_scoped(client, admin_headers, alice_headers):
    assert len(client.get("/api/employees", headers=admin_headers).get_json()["data"]) == 2

    mine = client.get("/api/employees", headers=alice_headers).get_json()["data"]
    assert [e["id"] for e in mine] == ["EMP001"]

    resp = client.get("/api/employees/EMP002", headers=alice_headers)
    assert resp.status_code == 403


def test_create_employee_conflict(client, admin_headers):
    payload = {
        "id": "EMP001",
        "name": "Dup",
        "email": "dup@example.com",
        "username": "dup",
        "password": "secret1",
        "department": "Ops",
        "position": "Clerk",
        "salary": 1000,
    }
    resp = client.post("/api/employees", json=payload, headers=admin_headers)
    assert resp.status_code == 409


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "Not found"}


@pytest.mark.parametrize("body", [{"month": 0, "year": 2025}, {"month": None, "year": 2025}, {"month": 2, "year": 0}])
def test_save_payroll_rejects_bad_period(client, container, admin_headers, body):
    resp = client.post("/api/payroll", json=body, headers=admin_headers)
    assert resp.status_code == 400
    assert container.payroll_repo.list_records() == []


def test_save_payroll_defaults_to_current_period(client, container, admin_headers, monkeypatch):
    monkeypatch.setattr(payroll_controller, "now_local", lambda: datetime(2025, 2, 15, 9, 0))
    resp = client.post("/api/payroll", json={}, headers=admin_headers)
    assert resp.status_code == 201
    assert {(r["month"], r["year"]) for r in resp.get_json()["data"]} == {(2, 2025)}
