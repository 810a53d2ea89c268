from __future__ import annotations

from decimal import Decimal

from ...core.enums import AttendanceStatus
from .base import CheckOutStrategy, StatusDecision


class KeepStatusStrategy(CheckOutStrategy):
    """Statuses other than Present/Late are not reclassified by hours."""

    def decide(self, *, hours: Decimal, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
