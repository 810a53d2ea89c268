from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from werkzeug.security import generate_password_hash

from src.employee_management.employee_management.attendance.model import AttendanceRecord, AttendanceReportRow
from src.employee_management.employee_management.core.enums import AttendanceStatus, Role
from src.employee_management.employee_management.core.exceptions import DuplicateRecordError
from src.employee_management.employee_management.employees.model import AuthUser, CurrentUser, Employee


class FixedClock:
    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now

    def advance(self, **kwargs) -> datetime:
        self._now = self._now + timedelta(**kwargs)
        return self._now


ASHA = Employee(employee_id=1, employee_code="EMP001", full_name="Asha Rao", email="asha.rao@example.com", department_name="Human Resources")
VIKRAM = Employee(employee_id=2, employee_code="EMP002", full_name="Vikram Iyer", email="vikram.iyer@example.com", department_name="Engineering")
FORMER = Employee(employee_id=3, employee_code="EMP003", full_name="Former Staff", email="former@example.com", is_active=False)

ADMIN_CALLER = CurrentUser(user_id=100, username="admin", role=Role.ADMIN)
HR_CALLER = CurrentUser(user_id=101, username="asha", role=Role.HR, employee_id=1)
EMPLOYEE_CALLER = CurrentUser(user_id=102, username="vikram", role=Role.EMPLOYEE, employee_id=2)


@dataclass
class InMemoryEmployees:
    employees_by_id: dict[int, Employee] = field(
        default_factory=lambda: {e.employee_id: e for e in (ASHA, VIKRAM, FORMER)}
    )

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.employees_by_id.get(int(employee_id))

    def list_active(self):
        return [e for e in self.employees_by_id.values() if e.is_active]


class InMemoryAuthUsers:
    def __init__(self, users: Optional[list[AuthUser]] = None):
        if users is None:
            users = [
                AuthUser(100, "admin", "admin@example.com", generate_password_hash("admin123"), Role.ADMIN),
                AuthUser(101, "asha", "asha.rao@example.com", generate_password_hash("hr12345"), Role.HR, employee_id=1),
                AuthUser(102, "vikram", "vikram.iyer@example.com", generate_password_hash("emp12345"), Role.EMPLOYEE, employee_id=2),
            ]
        self._by_username = {u.username: u for u in users}
        self.logins: list[tuple[int, datetime]] = []

    def get_by_username(self, username: str) -> Optional[AuthUser]:
        return self._by_username.get(username)

    def touch_last_login(self, user_id: int, *, at: datetime) -> None:
        self.logins.append((user_id, at))


class InMemoryAttendance:
    """Mirrors the UNIQUE KEY on (employee_id, attendance_date) over live rows."""

    def __init__(self, employees: Optional[InMemoryEmployees] = None):
        self._records: dict[int, AttendanceRecord] = {}
        self._deleted: set[int] = set()
        self._id = 0
        self._employees = employees or InMemoryEmployees()

    def _active(self):
        return [r for rid, r in self._records.items() if rid not in self._deleted]

    def all_rows(self) -> list[AttendanceRecord]:
        """Every row, including soft-deleted ones."""
        return list(self._records.values())

    def get_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        for r in self._active():
            if r.employee_id == employee_id and r.attendance_date == attendance_date:
                return r
        return None

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        if attendance_id in self._deleted:
            return None
        return self._records.get(attendance_id)

    def create(self, *, employee_id, attendance_date, check_in_time, status, was_late, created_at, created_by) -> int:
        if self.get_for_employee_and_date(employee_id, attendance_date):
            raise DuplicateRecordError("duplicate (employee_id, attendance_date)")
        self._id += 1
        self._records[self._id] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            attendance_date=attendance_date,
            check_in_time=check_in_time,
            check_out_time=None,
            total_hours=None,
            status=status,
            was_late=was_late,
            created_at=created_at,
            created_by=created_by,
        )
        return self._id

    def update_checkout(self, *, attendance_id, check_out_time, total_hours, status, updated_at, updated_by) -> bool:
        rec = self.get_by_id(attendance_id)
        if not rec or rec.check_out_time is not None or rec.check_in_time is None:
            return False
        if rec.status not in (AttendanceStatus.PRESENT, AttendanceStatus.LATE):
            return False
        self._records[attendance_id] = replace(
            rec,
            check_out_time=check_out_time,
            total_hours=total_hours,
            status=status,
            updated_at=updated_at,
            updated_by=updated_by,
        )
        return True

    def relabel(self, *, attendance_id, status, updated_at, updated_by) -> bool:
        rec = self.get_by_id(attendance_id)
        if not rec:
            return False
        self._records[attendance_id] = replace(
            rec,
            status=status,
            check_in_time=None,
            check_out_time=None,
            total_hours=None,
            was_late=False,
            updated_at=updated_at,
            updated_by=updated_by,
        )
        return True

    def soft_delete(self, *, attendance_id, deleted_at, deleted_by) -> bool:
        if not self.get_by_id(attendance_id):
            return False
        self._deleted.add(attendance_id)
        return True

    def list_active(self, attendance_date: Optional[date] = None):
        return [r for r in self._active() if attendance_date is None or r.attendance_date == attendance_date]

    def get_report_rows(self, *, start_date, end_date, employee_id=None):
        rows = []
        for r in self._active():
            if not start_date <= r.attendance_date <= end_date:
                continue
            if employee_id is not None and r.employee_id != employee_id:
                continue
            e = self._employees.get_by_id(r.employee_id)
            rows.append(
                AttendanceReportRow(
                    attendance_id=r.attendance_id,
                    employee_id=r.employee_id,
                    employee_code=e.employee_code,
                    full_name=e.full_name,
                    department_name=e.department_name,
                    attendance_date=r.attendance_date,
                    check_in_time=r.check_in_time,
                    check_out_time=r.check_out_time,
                    total_hours=r.total_hours,
                    status=r.status,
                    was_late=r.was_late,
                )
            )
        rows.sort(key=lambda x: (x.attendance_date, x.employee_id))
        return rows

    def seed(self, *, employee_id: int, attendance_date: date, status: AttendanceStatus, total_hours: str | None = None, was_late: bool = False) -> int:
        """Insert a finished day directly (report tests)."""
        check_in = datetime.combine(attendance_date, datetime.min.time()).replace(hour=9)
        rid = self.create(
            employee_id=employee_id,
            attendance_date=attendance_date,
            check_in_time=check_in if total_hours else None,
            status=status,
            was_late=was_late,
            created_at=check_in,
            created_by=None,
        )
        if total_hours:
            hours = Decimal(total_hours)
            self._records[rid] = replace(
                self._records[rid],
                check_out_time=check_in + timedelta(hours=float(hours)),
                total_hours=hours,
            )
        return rid
