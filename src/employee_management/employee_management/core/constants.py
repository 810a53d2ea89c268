"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time
from decimal import Decimal

DEFAULT_LATE_CUTOFF = time(9, 30, 0)
FULL_DAY_HOURS = Decimal("8")
HOURS_QUANTUM = Decimal("0.01")
DEFAULT_TIMEZONE = "UTC"
DEFAULT_SESSION_DAYS = 7

# Mon-Fri; days without a record only count as Absent on these weekdays.
WORKING_WEEKDAYS = frozenset({0, 1, 2, 3, 4})
