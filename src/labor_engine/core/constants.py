"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Every value can be overridden through the settings modules.
"""

from decimal import Decimal

DEFAULT_STANDARD_DAILY_HOURS = Decimal(8)

# (work hours threshold, minimum break minutes), strictest first
DEFAULT_BREAK_RULES = ((Decimal(8), 60), (Decimal(6), 45))

DEFAULT_NIGHT_START_HOUR = 22
DEFAULT_NIGHT_END_HOUR = 5

DEFAULT_OVERTIME_WARNING_HOURS = Decimal(45)
DEFAULT_OVERTIME_CRITICAL_HOURS = Decimal(80)
DEFAULT_MONTHLY_TOTAL_LIMIT_HOURS = Decimal(100)

# Scale of every stored hour figure; matches the DECIMAL(12, 6) columns.
HOURS_QUANTUM = Decimal("0.000001")
