"""Constants and defaults.

Note: Keep workplace policy numbers here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_TIMEZONE = "Asia/Bangkok"

# Check-in window (local wall-clock, both ends inclusive).
CHECK_IN_OPEN = time(8, 0)
CHECK_IN_CLOSE = time(11, 0)

# Early check-ins finish at this fixed local time instead of check-in + workday.
STANDARD_END_OF_DAY = time(17, 0)

# Flat workday length; the lunch break is part of it, not modelled separately.
WORKDAY_TOTAL_HOURS = 9

# Monday=0 .. Friday=4 (datetime.weekday()).
WORKING_WEEKDAYS = frozenset({0, 1, 2, 3, 4})

PRE_COMPLETION_OFFSET_MINUTES = 10
REMINDER_TOLERANCE_MINUTES = 2
REMINDER_POLL_INTERVAL_MINUTES = 4

# Local window in which check-in reminders go out (inclusive start, exclusive end).
CHECK_IN_REMINDER_START = time(8, 0)
CHECK_IN_REMINDER_END = time(10, 0)
