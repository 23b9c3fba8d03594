"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

BASE_DAY_HOURS = 8.0
DEFAULT_LATE_GRACE_MINUTES = 5
OVERTIME_MULTIPLIER = 1.5
TDS_RATE = 0.01
DEFAULT_IMPORT_BATCH_SIZE = 400
MONEY_DECIMALS = 2
HOURS_DECIMALS = 2
