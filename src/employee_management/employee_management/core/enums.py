from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for authorization decisions."""

    ADMIN = "Admin"
    HR = "HR"
    MANAGER = "Manager"
    EMPLOYEE = "Employee"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    HALF_DAY = "HalfDay"
    HOLIDAY = "Holiday"
    LEAVE = "Leave"


PRIVILEGED_ROLES = frozenset({Role.ADMIN, Role.HR})
