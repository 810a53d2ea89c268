from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)")


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    if value is None or not value.strip():
        return None
    return parse_iso_date(value)


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM or HH:MM:SS into a time (used for the late cutoff setting)."""
    v = (value or "").strip()
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time of day: {value!r}")


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Wall clock in the configured timezone.

    Returns naive datetimes, which is what the DATETIME columns store.
    """

    def __init__(self, timezone: str = DEFAULT_TIMEZONE):
        try:
            self._tz = ZoneInfo(timezone)
        except ZoneInfoNotFoundError:
            raise ValueError(f"Unknown timezone: {timezone!r}")

    def now(self) -> datetime:
        return datetime.now(self._tz).replace(tzinfo=None)
