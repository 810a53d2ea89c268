from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    was_late: bool = False


class CheckInStrategy(ABC):
    """Strategy Pattern: decide the initial status of a day at check-in."""

    @abstractmethod
    def decide(self, *, now: datetime) -> StatusDecision:
        raise NotImplementedError


class CheckOutStrategy(ABC):
    """Strategy Pattern: re-decide the status of a day at check-out."""

    @abstractmethod
    def decide(self, *, hours: Decimal, current: AttendanceStatus) -> StatusDecision:
        raise NotImplementedError
