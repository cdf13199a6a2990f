"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MILLIS_PER_MINUTE = 60 * 1000
MILLIS_PER_HOUR = 60 * MILLIS_PER_MINUTE

DEFAULT_DAILY_OVERTIME_CAP_MILLIS = 3 * MILLIS_PER_HOUR
DEFAULT_DAYS_PER_MONTH_PRORATE = 22
DEFAULT_MAX_WORKING_MILLIS_PER_DAY = 8 * MILLIS_PER_HOUR

DEFAULT_HISTORY_LIMIT = 30
