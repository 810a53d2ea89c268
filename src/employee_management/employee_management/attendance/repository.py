from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    """Attendance record store.

    Every read excludes soft-deleted rows. ``create`` must raise
    ``DuplicateRecordError`` when an active row already exists for
    (employee_id, attendance_date); the storage constraint is the real guard.
    """

    def get_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def relabel(
        self,
        *,
        attendance_id: int,
        status: AttendanceStatus,
        updated_at: datetime,
        updated_by: Optional[int],
    ) -> bool:
        """Overwrite the status and clear check-in/out, total_hours and was_late."""

        raise NotImplementedError

    def soft_delete(self, *, attendance_id: int, deleted_at: datetime, deleted_by: Optional[int]) -> bool:
        raise NotImplementedError

    def list_active(self, attendance_date: Optional[date] = None) -> Sequence[AttendanceRecord]:
        """Active records in insertion order, optionally for one date."""

        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
