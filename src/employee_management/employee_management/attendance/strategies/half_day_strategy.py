from __future__ import annotations

from decimal import Decimal

from ...core.enums import AttendanceStatus
from .base import CheckOutStrategy, StatusDecision


class HalfDayStrategy(CheckOutStrategy):
    """Fewer than a full day's hours, whether under four hours or not."""

    def decide(self, *, hours: Decimal, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY)
