from __future__ import annotations

from datetime import date, datetime

import pytest

from src.employee_management.employee_management.core.enums import AttendanceStatus
from src.employee_management.employee_management.core.exceptions import ValidationError
from src.employee_management.employee_management.reports.service import AttendanceReportService
from tests.fakes import FixedClock


@pytest.fixture
def report_service(attendance_repo, employees_repo, clock):
    return AttendanceReportService(attendance_repo, employees_repo, clock)


def test_report_rows_and_summary(report_service, attendance_repo):
    attendance_repo.seed(employee_id=2, attendance_date=date(2026, 2, 2), status=AttendanceStatus.PRESENT, total_hours="8.5")
    attendance_repo.seed(employee_id=2, attendance_date=date(2026, 2, 3), status=AttendanceStatus.HALF_DAY, total_hours="3.25", was_late=True)
    attendance_repo.seed(employee_id=1, attendance_date=date(2026, 2, 3), status=AttendanceStatus.LEAVE)

    report = report_service.build_attendance_report(start=date(2026, 2, 1), end=date(2026, 2, 28))

    assert [(r["attendance_date"], r["employee_id"]) for r in report.rows] == [
        ("2026-02-02", 2),
        ("2026-02-03", 1),
        ("2026-02-03", 2),
    ]
    assert report.rows[1]["check_in"] == "-"
    assert report.rows[1]["total_hours"] == "-"

    vikram = report.summary[0]
    assert vikram["employee_id"] == 2
    assert vikram["present_days"] == 1
    assert vikram["half_days"] == 1
    assert vikram["late_days"] == 1
    assert vikram["total_hours"] == "11.75"
    assert report.summary[1]["leave_days"] == 1


def test_report_filters_by_employee(report_service, attendance_repo):
    attendance_repo.seed(employee_id=2, attendance_date=date(2026, 2, 2), status=AttendanceStatus.PRESENT, total_hours="8")
    attendance_repo.seed(employee_id=1, attendance_date=date(2026, 2, 2), status=AttendanceStatus.PRESENT, total_hours="8")

    report = report_service.build_attendance_report(start=date(2026, 2, 1), end=date(2026, 2, 28), employee_id=1)

    assert {r["employee_id"] for r in report.rows} == {1}


def test_report_rejects_inverted_range(report_service):
    with pytest.raises(ValidationError):
        report_service.build_attendance_report(start=date(2026, 2, 10), end=date(2026, 2, 1))


def test_csv_export_has_header_and_rows(report_service, attendance_repo):
    attendance_repo.seed(employee_id=2, attendance_date=date(2026, 2, 2), status=AttendanceStatus.PRESENT, total_hours="8")
    report = report_service.build_attendance_report(start=date(2026, 2, 1), end=date(2026, 2, 28))

    text = report_service.export_csv(report).decode("utf-8-sig")
    lines = text.strip().splitlines()

    assert lines[0].startswith("attendance_date,employee_id,employee_code,full_name")
    assert lines[1].startswith("2026-02-02,2,EMP002,Vikram Iyer")
    assert "8.00" in lines[1]


def test_monthly_pattern_counts_absent_working_days_lazily(attendance_repo, employees_repo):
    # Feb 2026: Mon 2 .. Fri 6 is the first full week; clock sits on Sat 7.
    clock = FixedClock(datetime(2026, 2, 7, 12, 0))
    svc = AttendanceReportService(attendance_repo, employees_repo, clock)
    for day in (2, 3, 4):
        attendance_repo.seed(employee_id=2, attendance_date=date(2026, 2, day), status=AttendanceStatus.PRESENT, total_hours="8", was_late=day == 4)
    attendance_repo.seed(employee_id=2, attendance_date=date(2026, 2, 5), status=AttendanceStatus.HOLIDAY)

    pattern = svc.monthly_pattern(year=2026, month=2)

    assert [p["employee_id"] for p in pattern] == [2, 1]
    vikram, asha = pattern
    assert vikram["present_days"] == 3
    assert vikram["late_days"] == 1
    assert vikram["absent_days"] == 1  # only Fri 6 is missing
    assert vikram["total_hours"] == "24.00"
    assert asha["absent_days"] == 5
    assert asha["total_hours"] == "0.00"


def test_monthly_pattern_validates_month(report_service):
    with pytest.raises(ValidationError):
        report_service.monthly_pattern(year=2026, month=13)


def test_daily_roster_marks_missing_employees_absent_only_for_past_dates(report_service, attendance_repo, clock):
    yesterday = date(2026, 3, 1)
    today = clock.now().date()
    attendance_repo.seed(employee_id=2, attendance_date=yesterday, status=AttendanceStatus.PRESENT, total_hours="8")
    attendance_repo.seed(employee_id=2, attendance_date=today, status=AttendanceStatus.LEAVE)

    past = {row["employee_id"]: row for row in report_service.daily_roster(attendance_date=yesterday)}
    current = {row["employee_id"]: row for row in report_service.daily_roster(attendance_date=today)}

    assert set(past) == {1, 2}
    assert past[2]["status"] == "Present"
    assert past[1]["status"] == "Absent"
    assert past[1]["attendance_id"] is None
    assert current[2]["status"] == "Leave"
    assert current[1]["status"] is None
