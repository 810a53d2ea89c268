from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateRecordError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    attendance_id, employee_id, attendance_date, check_in_time, check_out_time,
    total_hours, status, was_late, created_at, created_by, updated_at, updated_by
"""


def _to_record(r: dict) -> AttendanceRecord:
    total_hours = r.get("total_hours")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        attendance_date=r["attendance_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        total_hours=Decimal(total_hours) if total_hours is not None else None,
        status=AttendanceStatus(r["status"]),
        was_late=bool(r.get("was_late")),
        created_at=r.get("created_at"),
        created_by=r.get("created_by"),
        updated_at=r.get("updated_at"),
        updated_by=r.get("updated_by"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance
                WHERE employee_id=%s AND attendance_date=%s AND is_active=1 AND deleted_at IS NULL
                """,
                (int(employee_id), attendance_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance
                WHERE attendance_id=%s AND is_active=1 AND deleted_at IS NULL
                """,
                (int(attendance_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(
        self,
        *,
        employee_id: int,
        attendance_date: date,
        check_in_time: Optional[datetime],
        status: AttendanceStatus,
        was_late: bool,
        created_at: datetime,
        created_by: Optional[int],
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(employee_id, attendance_date, check_in_time, status, was_late, created_at, created_by)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (int(employee_id), attendance_date, check_in_time, status.value, int(was_late), created_at, created_by),
                )
                return int(cur.lastrowid)
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateRecordError(
                    f"attendance already exists for employee {employee_id} on {attendance_date.isoformat()}"
                ) from exc
            raise

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        total_hours: Decimal,
        status: AttendanceStatus,
        updated_at: datetime,
        updated_by: Optional[int],
    ) -> bool:
        # Only an open check-in can be closed: a concurrent second check-out or a
        # Leave/Holiday relabel in between leaves the row unmatched.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out_time=%s, total_hours=%s, status=%s, updated_at=%s, updated_by=%s
                WHERE attendance_id=%s AND check_out_time IS NULL AND check_in_time IS NOT NULL
                  AND status IN (%s, %s) AND deleted_at IS NULL
                """,
                (
                    check_out_time,
                    total_hours,
                    status.value,
                    updated_at,
                    updated_by,
                    int(attendance_id),
                    AttendanceStatus.PRESENT.value,
                    AttendanceStatus.LATE.value,
                ),
            )
            return cur.rowcount > 0

    def relabel(
        self,
        *,
        attendance_id: int,
        status: AttendanceStatus,
        updated_at: datetime,
        updated_by: Optional[int],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET status=%s, check_in_time=NULL, check_out_time=NULL, total_hours=NULL, was_late=0,
                    updated_at=%s, updated_by=%s
                WHERE attendance_id=%s AND deleted_at IS NULL
                """,
                (status.value, updated_at, updated_by, int(attendance_id)),
            )
            return cur.rowcount > 0

    def soft_delete(self, *, attendance_id: int, deleted_at: datetime, deleted_by: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET is_active=0, deleted_at=%s, updated_at=%s, updated_by=%s
                WHERE attendance_id=%s AND deleted_at IS NULL
                """,
                (deleted_at, deleted_at, deleted_by, int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_active(self, attendance_date: Optional[date] = None) -> Sequence[AttendanceRecord]:
        clauses = ["is_active=1", "deleted_at IS NULL"]
        params: list[object] = []
        if attendance_date is not None:
            clauses.append("attendance_date=%s")
            params.append(attendance_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance
                WHERE {where}
                ORDER BY attendance_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["a.attendance_date BETWEEN %s AND %s", "a.is_active=1", "a.deleted_at IS NULL"]
        params: list[object] = [start_date, end_date]

        if employee_id is not None:
            clauses.append("a.employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    a.attendance_id, a.employee_id, e.employee_code,
                    CONCAT(e.first_name, ' ', e.last_name) AS full_name,
                    d.name AS department_name,
                    a.attendance_date, a.check_in_time, a.check_out_time,
                    a.total_hours, a.status, a.was_late
                FROM attendance a
                JOIN employees e ON e.employee_id = a.employee_id
                LEFT JOIN departments d ON d.department_id = e.department_id
                WHERE {where}
                ORDER BY a.attendance_date ASC, a.employee_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceReportRow(
                    attendance_id=int(r["attendance_id"]),
                    employee_id=int(r["employee_id"]),
                    employee_code=r["employee_code"],
                    full_name=r["full_name"],
                    department_name=r.get("department_name"),
                    attendance_date=r["attendance_date"],
                    check_in_time=r.get("check_in_time"),
                    check_out_time=r.get("check_out_time"),
                    total_hours=Decimal(r["total_hours"]) if r.get("total_hours") is not None else None,
                    status=AttendanceStatus(r["status"]),
                    was_late=bool(r.get("was_late")),
                )
                for r in rows
            ]
