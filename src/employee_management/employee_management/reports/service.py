from __future__ import annotations

import calendar
import csv
import io
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import Clock
from ..core.constants import WORKING_WEEKDAYS
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository

REPORT_CSV_FIELDS = [
    "attendance_date",
    "employee_id",
    "employee_code",
    "full_name",
    "department_name",
    "check_in",
    "check_out",
    "total_hours",
    "status",
    "was_late",
]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


def _fmt_time(value: Optional[datetime]) -> str:
    return value.strftime("%H:%M") if value else "-"


def _fmt_hours(value: Optional[Decimal]) -> str:
    return f"{value:.2f}" if value is not None else "-"


class AttendanceReportService:
    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository, clock: Clock):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
    ) -> ReportData:
        if start > end:
            raise ValidationError("start date must not be after end date")

        query_rows = self._attendance.get_report_rows(start_date=start, end_date=end, employee_id=employee_id)

        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for r in query_rows:
            out_rows.append(
                {
                    "attendance_date": r.attendance_date.strftime("%Y-%m-%d"),
                    "employee_id": r.employee_id,
                    "employee_code": r.employee_code,
                    "full_name": r.full_name,
                    "department_name": r.department_name or "-",
                    "check_in": _fmt_time(r.check_in_time),
                    "check_out": _fmt_time(r.check_out_time),
                    "total_hours": _fmt_hours(r.total_hours),
                    "status": r.status.value,
                    "was_late": r.was_late,
                }
            )

            s = summary_map.get(r.employee_id)
            if not s:
                s = {
                    "employee_id": r.employee_id,
                    "employee_code": r.employee_code,
                    "full_name": r.full_name,
                    "present_days": 0,
                    "half_days": 0,
                    "late_days": 0,
                    "leave_days": 0,
                    "holiday_days": 0,
                    "total_hours": Decimal("0"),
                }
                summary_map[r.employee_id] = s

            if r.status == AttendanceStatus.PRESENT:
                s["present_days"] += 1
            elif r.status == AttendanceStatus.HALF_DAY:
                s["half_days"] += 1
            elif r.status == AttendanceStatus.LEAVE:
                s["leave_days"] += 1
            elif r.status == AttendanceStatus.HOLIDAY:
                s["holiday_days"] += 1
            if r.was_late:
                s["late_days"] += 1
            s["total_hours"] += r.total_hours or Decimal("0")

        summary = sorted(summary_map.values(), key=lambda x: x["total_hours"], reverse=True)
        for s in summary:
            s["total_hours"] = _fmt_hours(s["total_hours"])
        return ReportData(rows=out_rows, summary=summary)

    @staticmethod
    def export_csv(data: ReportData) -> bytes:
        """Render report rows as CSV (UTF-8 with BOM so spreadsheet apps detect the encoding)."""

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_CSV_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)
        return out.getvalue().encode("utf-8-sig")

    def _absent_days(self, start: date, end: date, recorded: set[date]) -> int:
        """Past working days in [start, end] with no record."""

        last = min(end, self._clock.now().date() - timedelta(days=1))
        count = 0
        day = start
        while day <= last:
            if day.weekday() in WORKING_WEEKDAYS and day not in recorded:
                count += 1
            day += timedelta(days=1)
        return count

    def monthly_pattern(self, *, year: int, month: int) -> list[dict]:
        """Per-employee attendance counts for one month, most present days first."""

        if not 1 <= int(month) <= 12:
            raise ValidationError("month must be between 1 and 12")
        if int(year) < 1:
            raise ValidationError("year must be positive")

        start = date(int(year), int(month), 1)
        end = date(int(year), int(month), calendar.monthrange(int(year), int(month))[1])
        rows = self._attendance.get_report_rows(start_date=start, end_date=end)

        by_employee: dict[int, list] = {}
        for r in rows:
            by_employee.setdefault(r.employee_id, []).append(r)

        pattern = []
        for employee in self._employees.list_active():
            records = by_employee.get(employee.employee_id, [])
            pattern.append(
                {
                    "employee_id": employee.employee_id,
                    "employee_name": employee.full_name,
                    "present_days": sum(1 for r in records if r.status == AttendanceStatus.PRESENT),
                    "absent_days": self._absent_days(start, end, {r.attendance_date for r in records}),
                    "late_days": sum(1 for r in records if r.was_late),
                    "total_hours": _fmt_hours(sum((r.total_hours or Decimal("0") for r in records), Decimal("0"))),
                }
            )

        pattern.sort(key=lambda x: x["present_days"], reverse=True)
        return pattern

    def daily_roster(self, *, attendance_date: date) -> list[dict]:
        """Every active employee's status for one date.

        Employees without a record are Absent on past dates and have no
        status yet (None) today or later.
        """

        records: dict[int, AttendanceRecord] = {
            r.employee_id: r for r in self._attendance.list_active(attendance_date)
        }
        is_past = attendance_date < self._clock.now().date()

        roster = []
        for employee in self._employees.list_active():
            record = records.get(employee.employee_id)
            if record:
                status: Optional[str] = record.status.value
            elif is_past:
                status = AttendanceStatus.ABSENT.value
            else:
                status = None

            roster.append(
                {
                    "employee_id": employee.employee_id,
                    "employee_code": employee.employee_code,
                    "full_name": employee.full_name,
                    "department_name": employee.department_name,
                    "attendance_id": record.attendance_id if record else None,
                    "status": status,
                    "check_in": _fmt_time(record.check_in_time) if record else "-",
                    "check_out": _fmt_time(record.check_out_time) if record else "-",
                    "total_hours": _fmt_hours(record.total_hours) if record else "-",
                }
            )
        return roster
