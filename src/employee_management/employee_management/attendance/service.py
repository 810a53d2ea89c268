from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock
from ..common.validators import require_positive_id
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    DuplicateRecordError,
    NotFoundError,
    ValidationError,
)
from ..employees.model import CurrentUser, Employee
from ..employees.repository import EmployeeRepository
from .factory import AttendanceStrategyFactory, elapsed_hours, round_hours
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        clock: Clock,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee or not employee.is_active:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    @staticmethod
    def _require_privileged(caller: CurrentUser, action: str) -> None:
        if not caller.is_privileged:
            logger.warning("user %s (%s) denied: %s", caller.user_id, caller.role.value, action)
            raise AuthorizationError(f"Only Admin or HR can {action}")

    @staticmethod
    def _require_self_or_privileged(caller: CurrentUser, employee_id: int) -> None:
        if not caller.can_act_for(employee_id):
            logger.warning("user %s denied attendance action for employee %s", caller.user_id, employee_id)
            raise AuthorizationError("You can only record attendance for yourself")

    def _reload(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError(f"Attendance record {attendance_id} not found")
        return record

    def check_in(self, caller: CurrentUser, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        employee_id = require_positive_id(employee_id, "employeeId")
        self._require_self_or_privileged(caller, employee_id)
        self._require_employee(employee_id)

        now = now or self._clock.now()
        today = now.date()

        if self._attendance.get_for_employee_and_date(employee_id, today):
            raise ConflictError("Already checked in or record exists for today.")

        decision = self._factory.for_checkin(now=now).decide(now=now)

        try:
            attendance_id = self._attendance.create(
                employee_id=employee_id,
                attendance_date=today,
                check_in_time=now,
                status=decision.status,
                was_late=decision.was_late,
                created_at=now,
                created_by=caller.user_id,
            )
        except DuplicateRecordError:
            # Lost a race with a concurrent check-in for the same day.
            raise ConflictError("Already checked in or record exists for today.")

        logger.info("employee %s checked in at %s as %s", employee_id, now.isoformat(), decision.status.value)
        return self._reload(attendance_id)

    def check_out(self, caller: CurrentUser, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        employee_id = require_positive_id(employee_id, "employeeId")
        self._require_self_or_privileged(caller, employee_id)
        self._require_employee(employee_id)

        now = now or self._clock.now()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record:
            raise NotFoundError("No check-in found for today.")
        if record.is_checked_out:
            raise ConflictError("Already checked out.")
        if not record.is_checked_in:
            raise ConflictError(f"Today is recorded as {record.status.value}; there is nothing to check out.")
        if now < record.check_in_time:
            raise ValidationError("Check-out time cannot be earlier than check-in time.")

        hours = elapsed_hours(record.check_in_time, now)
        decision = self._factory.for_checkout(hours=hours, current_status=record.status).decide(
            hours=hours, current=record.status
        )
        total_hours = round_hours(hours)

        ok = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            total_hours=total_hours,
            status=decision.status,
            updated_at=now,
            updated_by=caller.user_id,
        )
        if not ok:
            # Checked out or relabelled by someone else since the lookup above.
            raise ConflictError("Attendance record changed during check-out; reload and try again.")

        logger.info(
            "employee %s checked out after %s h as %s", employee_id, total_hours, decision.status.value
        )
        return self._reload(record.attendance_id)

    def _mark_day(
        self,
        caller: CurrentUser,
        employee_id: int,
        attendance_date: Optional[date],
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        self._require_privileged(caller, f"mark {status.value}")
        employee_id = require_positive_id(employee_id, "employeeId")
        if attendance_date is None:
            raise ValidationError("date is required")
        self._require_employee(employee_id)

        now = self._clock.now()
        existing = self._attendance.get_for_employee_and_date(employee_id, attendance_date)

        if existing is None:
            try:
                attendance_id = self._attendance.create(
                    employee_id=employee_id,
                    attendance_date=attendance_date,
                    check_in_time=None,
                    status=status,
                    was_late=False,
                    created_at=now,
                    created_by=caller.user_id,
                )
            except DuplicateRecordError:
                raise ConflictError(f"A record for {attendance_date.isoformat()} was created concurrently.")
        else:
            attendance_id = existing.attendance_id
            self._attendance.relabel(
                attendance_id=attendance_id,
                status=status,
                updated_at=now,
                updated_by=caller.user_id,
            )

        logger.info(
            "user %s marked employee %s %s on %s",
            caller.user_id,
            employee_id,
            status.value,
            attendance_date.isoformat(),
        )
        return self._reload(attendance_id)

    def mark_leave(self, caller: CurrentUser, employee_id: int, attendance_date: Optional[date]) -> AttendanceRecord:
        return self._mark_day(caller, employee_id, attendance_date, AttendanceStatus.LEAVE)

    def mark_holiday(self, caller: CurrentUser, employee_id: int, attendance_date: Optional[date]) -> AttendanceRecord:
        return self._mark_day(caller, employee_id, attendance_date, AttendanceStatus.HOLIDAY)

    def list_records(self, caller: CurrentUser, attendance_date: Optional[date] = None) -> Sequence[AttendanceRecord]:
        records = self._attendance.list_active(attendance_date)
        logger.debug("user %s listed %d attendance records (date=%s)", caller.user_id, len(records), attendance_date)
        return records

    def get_record(self, caller: CurrentUser, attendance_id: int) -> AttendanceRecord:
        record = self._reload(require_positive_id(attendance_id, "attendanceId"))
        logger.debug("user %s read attendance record %s", caller.user_id, record.attendance_id)
        return record

    def delete_record(self, caller: CurrentUser, attendance_id: int) -> None:
        self._require_privileged(caller, "delete attendance records")
        attendance_id = require_positive_id(attendance_id, "attendanceId")

        if not self._attendance.soft_delete(
            attendance_id=attendance_id,
            deleted_at=self._clock.now(),
            deleted_by=caller.user_id,
        ):
            raise NotFoundError(f"Attendance record {attendance_id} not found")
        logger.info("user %s soft-deleted attendance record %s", caller.user_id, attendance_id)

    def get_today_record(self, employee_id: int) -> Optional[AttendanceRecord]:
        """Get today's attendance record for an employee."""
        return self._attendance.get_for_employee_and_date(int(employee_id), self._clock.now().date())
