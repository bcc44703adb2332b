from __future__ import annotations

from datetime import date, time
from decimal import Decimal

import pytest

from src.presence_payroll.presence_payroll.employees.model import CompensationConfig, Employee
from src.presence_payroll.presence_payroll.main import create_app


@pytest.fixture
def client(monkeypatch, container, employees, punches):
    monkeypatch.setenv("APP_ENV", "testing")
    employees.add(
        Employee(user_id=1, full_name="Asha Rao", username="asha"),
        CompensationConfig(ctc_amount=Decimal("312000")),
    )
    for d in range(1, 31):
        day = date(2025, 9, d)
        if day.weekday() != 6:
            punches.add_day(1, day, time(9, 0), time(17, 30))
    app = create_app(container=container)
    return app.test_client()


def _generate(client, **extra):
    return client.post("/api/salary-slips/generate", json={"month": 9, "year": 2025, **extra})


def test_generate_and_fetch(client):
    resp = _generate(client)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert len(body["created"]) == 1
    slip = body["created"][0]
    assert slip["snapshot"]["net_salary"] == 26000
    assert slip["payment_status"] == "pending"

    resp = client.get(f"/api/salary-slips/{slip['slip_id']}")
    assert resp.status_code == 200
    assert resp.get_json()["slip"]["snapshot"]["present_days"] == 26

    resp = client.get("/api/salary-slips/user/1?month=9&year=2025")
    assert resp.get_json()["slip"]["slip_id"] == slip["slip_id"]


def test_generate_requires_period(client):
    resp = client.post("/api/salary-slips/generate", json={"month": 9})
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_second_generate_reports_skip(client):
    _generate(client)
    body = _generate(client).get_json()
    assert body["created"] == []
    assert body["skipped"][0]["reason"] == "slip already exists"


def test_preview_returns_snapshots(client):
    body = client.get("/api/salary-slips/preview?month=9&year=2025").get_json()
    assert body["success"] is True
    assert body["previews"][0]["snapshot"]["gross_salary"] == 26000
    assert body["errors"] == []


def test_list_with_pagination(client):
    _generate(client)
    body = client.get("/api/salary-slips?year=2025&page=1&limit=10").get_json()
    assert body["pagination"] == {"page": 1, "limit": 10, "total": 1, "pages": 1}


def test_payment_lock_and_delete_flow(client):
    slip_id = _generate(client).get_json()["created"][0]["slip_id"]

    resp = client.patch(f"/api/salary-slips/{slip_id}/payment", json={"paymentStatus": "paid", "paymentMethod": "bank"})
    assert resp.status_code == 200
    slip = resp.get_json()["slip"]
    assert slip["locked"] is True
    assert slip["payment_method"] == "bank"

    resp = client.patch(f"/api/salary-slips/{slip_id}/lock", json={"locked": False})
    assert resp.status_code == 409

    resp = client.delete(f"/api/salary-slips/{slip_id}")
    assert resp.status_code == 409


def test_unknown_slip_is_404(client):
    resp = client.get("/api/salary-slips/999")
    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "Salary slip 999 not found"}


def test_bad_payment_date_is_400(client):
    slip_id = _generate(client).get_json()["created"][0]["slip_id"]
    resp = client.patch(
        f"/api/salary-slips/{slip_id}/payment", json={"paymentStatus": "paid", "paymentDate": "yesterday"}
    )
    assert resp.status_code == 400
