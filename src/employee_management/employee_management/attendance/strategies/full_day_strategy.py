from __future__ import annotations

from decimal import Decimal

from ...core.enums import AttendanceStatus
from .base import CheckOutStrategy, StatusDecision


class FullDayStrategy(CheckOutStrategy):
    """A full day worked. Lateness is kept on the record's ``was_late`` flag."""

    def decide(self, *, hours: Decimal, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
