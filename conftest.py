from __future__ import annotations

from datetime import datetime

import pytest

from src.employee_management.employee_management.attendance.service import AttendanceService
from src.employee_management.employee_management.container import wire_container
from tests.fakes import FixedClock, InMemoryAttendance, InMemoryAuthUsers, InMemoryEmployees


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 8, 45, 0)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def attendance_repo(employees_repo) -> InMemoryAttendance:
    return InMemoryAttendance(employees_repo)


@pytest.fixture
def attendance_service(attendance_repo, employees_repo, clock) -> AttendanceService:
    return AttendanceService(attendance_repo, employees_repo, clock)


@pytest.fixture
def container(attendance_repo, employees_repo, clock):
    return wire_container(
        employees_repo=employees_repo,
        auth_users_repo=InMemoryAuthUsers(),
        attendance_repo=attendance_repo,
        clock=clock,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.employee_management.employee_management.main import create_app

    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()
