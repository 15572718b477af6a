"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time, timedelta
from decimal import Decimal

DEFAULT_TIMEZONE = "Africa/Accra"

# Auto-close
AUTO_CLOSE_HOUR = 22
AUTO_CLOSE_LOCATION = "Auto-closed at 10 PM"
FORCE_CLOSE_LOCATION = "Force auto-closed"
AUTO_CLOSE_INTERVAL_SECONDS = 60 * 60

# Missing day backfill
PLACEHOLDER_CLOCK_IN = time(8, 0, 0)
PLACEHOLDER_GAP = timedelta(seconds=1)
PLACEHOLDER_LOCATION = "Auto-generated (no punch)"
BACKFILL_RUN_AT = time(0, 0)

# Work history
REQUIRED_DAILY_WORK = timedelta(hours=8)
ADJUSTMENT_TOLERANCE = timedelta(minutes=10)
MAX_SHIFT_SPAN = timedelta(hours=24)

# Job ledger keys
JOB_AUTO_CLOSE = "auto_close"
JOB_BACKFILL = "backfill"
ALL_TENANTS = "*"

# SSNIT (monthly)
SSNIT_SALARY_CAP = Decimal("61000")
SSNIT_EMPLOYEE_RATE = Decimal("0.055")
SSNIT_EMPLOYER_RATE = Decimal("0.13")
SSNIT_TIER1_RATE = Decimal("0.135")
SSNIT_TIER2_RATE = Decimal("0.05")

# PAYE (monthly) as (band width, marginal rate); None width means unbounded.
PAYE_BRACKETS = (
    (Decimal("490"), Decimal("0")),
    (Decimal("110"), Decimal("0.05")),
    (Decimal("130"), Decimal("0.10")),
    (Decimal("3166.67"), Decimal("0.175")),
    (Decimal("16000"), Decimal("0.25")),
    (Decimal("30520"), Decimal("0.30")),
    (None, Decimal("0.35")),
)

# Work history window when the caller gives no range
DEFAULT_HISTORY_DAYS = 31
