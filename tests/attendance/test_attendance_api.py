from __future__ import annotations

from datetime import datetime

import pytest


def login(client, username: str, password: str):
    return client.post("/api/auth/login", json={"username": username, "password": password})


@pytest.fixture
def as_employee(client):
    assert login(client, "vikram", "emp12345").status_code == 200
    return client


@pytest.fixture
def as_hr(client):
    assert login(client, "asha", "hr12345").status_code == 200
    return client


def test_requires_login(client):
    resp = client.post("/api/attendance/checkin/2")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_bad_login_is_401(client):
    resp = login(client, "vikram", "nope")

    assert resp.status_code == 401


def test_me_returns_session_user(as_employee):
    body = as_employee.get("/api/auth/me").get_json()

    assert body == {"user_id": 102, "username": "vikram", "role": "Employee", "employee_id": 2}


def test_checkin_then_duplicate_is_400(as_employee, clock):
    clock.set(datetime(2026, 3, 2, 9, 0))

    resp = as_employee.post("/api/attendance/checkin/2")
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["status"] == "Present"
    assert body["attendance_date"] == "2026-03-02"
    assert body["check_in_time"] == "2026-03-02T09:00:00"
    assert body["total_hours"] is None

    again = as_employee.post("/api/attendance/checkin/2")
    assert again.status_code == 400
    assert "Already checked in" in again.get_json()["message"]


def test_checkout_flow_status_codes(as_employee, clock):
    clock.set(datetime(2026, 3, 2, 10, 0))
    assert as_employee.post("/api/attendance/checkout/2").status_code == 404

    as_employee.post("/api/attendance/checkin/2")
    clock.set(datetime(2026, 3, 2, 12, 0))
    resp = as_employee.post("/api/attendance/checkout/2")

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "HalfDay"
    assert resp.get_json()["total_hours"] == "2.00"
    assert resp.get_json()["was_late"] is True

    assert as_employee.post("/api/attendance/checkout/2").status_code == 400


def test_employee_cannot_check_in_for_colleague(as_employee):
    assert as_employee.post("/api/attendance/checkin/1").status_code == 403


def test_malformed_employee_id_is_400(as_employee):
    assert as_employee.post("/api/attendance/checkin/abc").status_code == 400


def test_holiday_and_leave_are_privileged(as_employee):
    assert as_employee.post("/api/attendance/holiday/2?date=2026-03-10").status_code == 403
    assert as_employee.post("/api/attendance/leave/2?date=2026-03-10").status_code == 403


def test_hr_marks_holiday_and_lists_by_date(as_hr):
    resp = as_hr.post("/api/attendance/holiday/2?date=2026-03-10")
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["status"] == "Holiday"
    assert body["check_in_time"] is None

    listed = as_hr.get("/api/attendance?date=2026-03-10").get_json()
    assert [r["attendance_id"] for r in listed] == [body["attendance_id"]]
    assert as_hr.get("/api/attendance?date=2026-03-11").get_json() == []


def test_mark_leave_with_bad_or_missing_date_is_400(as_hr):
    assert as_hr.post("/api/attendance/leave/2?date=10-03-2026").status_code == 400
    assert as_hr.post("/api/attendance/leave/2").status_code == 400


def test_unknown_employee_is_404(as_hr):
    assert as_hr.post("/api/attendance/leave/42?date=2026-03-10").status_code == 404


def test_delete_hides_record(as_hr):
    rec = as_hr.post("/api/attendance/leave/2?date=2026-03-10").get_json()

    assert as_hr.delete(f"/api/attendance/{rec['attendance_id']}").status_code == 200
    assert as_hr.get(f"/api/attendance/{rec['attendance_id']}").status_code == 404
    assert as_hr.get("/api/attendance").get_json() == []


def test_roster_and_reports_endpoints(as_hr, clock):
    clock.set(datetime(2026, 3, 2, 9, 0))
    as_hr.post("/api/attendance/checkin/1")

    roster = as_hr.get("/api/attendance/roster?date=2026-03-02").get_json()
    assert roster["date"] == "2026-03-02"
    assert {e["employee_id"]: e["status"] for e in roster["employees"]} == {1: "Present", 2: None}

    report = as_hr.get("/api/reports/attendance?start=2026-03-01&end=2026-03-31").get_json()
    assert [r["employee_id"] for r in report["rows"]] == [1]

    csv_resp = as_hr.get("/api/reports/attendance.csv?start=2026-03-01&end=2026-03-31")
    assert csv_resp.status_code == 200
    assert csv_resp.mimetype == "text/csv"
    assert "attendance_report_20260301_20260331.csv" in csv_resp.headers["Content-Disposition"]

    pattern = as_hr.get("/api/dashboard/attendance-pattern?year=2026&month=3").get_json()
    assert pattern[0]["employee_id"] == 1
    assert as_hr.get("/api/dashboard/attendance-pattern?year=2026&month=x").status_code == 400


def test_my_today_record(as_employee, clock):
    clock.set(datetime(2026, 3, 2, 9, 40))
    assert as_employee.get("/api/attendance/me/today").get_json() is None

    as_employee.post("/api/attendance/checkin/2")

    body = as_employee.get("/api/attendance/me/today").get_json()
    assert body["status"] == "Late"


def test_logout_clears_session(as_employee):
    as_employee.post("/api/auth/logout")

    assert as_employee.get("/api/auth/me").status_code == 401


def test_login_with_non_object_json_is_400(client):
    resp = client.post("/api/auth/login", json=["vikram", "emp12345"])

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
