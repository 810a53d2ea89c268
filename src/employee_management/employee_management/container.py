from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, SystemClock
from .core.constants import DEFAULT_LATE_CUTOFF, DEFAULT_TIMEZONE
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLAuthUserRepository, MySQLEmployeeRepository
from .employees.repository import AuthUserRepository, EmployeeRepository
from .employees.service import AuthService
from .reports.service import AttendanceReportService


@dataclass(frozen=True)
class Container:
    clock: Clock

    employees_repo: EmployeeRepository
    auth_users_repo: AuthUserRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    attendance_service: AttendanceService
    report_service: AttendanceReportService


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    auth_users_repo: AuthUserRepository,
    attendance_repo: AttendanceRepository,
    clock: Clock,
    late_cutoff: time = DEFAULT_LATE_CUTOFF,
) -> Container:
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        clock,
        strategy_factory=AttendanceStrategyFactory(late_cutoff=late_cutoff),
    )
    return Container(
        clock=clock,
        employees_repo=employees_repo,
        auth_users_repo=auth_users_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(auth_users_repo, clock),
        attendance_service=attendance_service,
        report_service=AttendanceReportService(attendance_repo, employees_repo, clock),
    )


def build_container(
    *,
    db_config: dict,
    late_cutoff: time = DEFAULT_LATE_CUTOFF,
    timezone: str = DEFAULT_TIMEZONE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        employees_repo=MySQLEmployeeRepository(conn),
        auth_users_repo=MySQLAuthUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        clock=SystemClock(timezone),
        late_cutoff=late_cutoff,
    )
