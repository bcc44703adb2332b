"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

# Day classification thresholds (minutes between first in and last out).
FULL_DAY_MINUTES = 480
HALF_DAY_MINUTES = 240
OVERTIME_AFTER_MINUTES = 540

# Python weekday() value treated as the weekly off day.
WEEK_OFF_WEEKDAY = 6

MONTHS_PER_YEAR = Decimal(12)
WEEKS_PER_YEAR = Decimal(52)
WEEKS_PER_MONTH = Decimal("4.33")
HALF_DAY_FACTOR = Decimal("0.5")

DEFAULT_STANDARD_DAILY_HOURS = Decimal(9)
DEFAULT_OVERTIME_MULTIPLIER = Decimal("1.0")

DEFAULT_SLIP_LIST_LIMIT = 50
DEFAULT_USER_SLIP_LIMIT = 12
