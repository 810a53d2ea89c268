from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from decimal import ROUND_HALF_EVEN, Decimal

from ..core.constants import DEFAULT_LATE_CUTOFF, FULL_DAY_HOURS, HOURS_QUANTUM
from ..core.enums import AttendanceStatus
from .strategies.base import CheckInStrategy, CheckOutStrategy
from .strategies.full_day_strategy import FullDayStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.keep_status_strategy import KeepStatusStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy

_RECLASSIFIED_ON_CHECKOUT = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE})


def elapsed_hours(check_in: datetime, check_out: datetime) -> Decimal:
    """Wall-clock hours between two timestamps, unrounded."""
    seconds = Decimal(str((check_out - check_in).total_seconds()))
    return seconds / Decimal(3600)


def round_hours(hours: Decimal) -> Decimal:
    return hours.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_EVEN)


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the status strategy for check-in and check-out."""

    late_cutoff: time = DEFAULT_LATE_CUTOFF
    full_day_hours: Decimal = FULL_DAY_HOURS

    def for_checkin(self, *, now: datetime) -> CheckInStrategy:
        if now.time() >= self.late_cutoff:
            return LateStrategy()
        return OnTimeStrategy()

    def for_checkout(self, *, hours: Decimal, current_status: AttendanceStatus) -> CheckOutStrategy:
        if current_status not in _RECLASSIFIED_ON_CHECKOUT:
            return KeepStatusStrategy()
        if hours >= self.full_day_hours:
            return FullDayStrategy()
        return HalfDayStrategy()
