import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "labor_engine"),
}

STANDARD_DAILY_HOURS = os.getenv("STANDARD_DAILY_HOURS", "8")
BREAK_RULES = os.getenv("BREAK_RULES", "8:60,6:45")
NIGHT_START_HOUR = int(os.getenv("NIGHT_START_HOUR", "22"))
NIGHT_END_HOUR = int(os.getenv("NIGHT_END_HOUR", "5"))
OVERTIME_WARNING_HOURS = os.getenv("OVERTIME_WARNING_HOURS", "45")
OVERTIME_CRITICAL_HOURS = os.getenv("OVERTIME_CRITICAL_HOURS", "80")
MONTHLY_TOTAL_LIMIT_HOURS = os.getenv("MONTHLY_TOTAL_LIMIT_HOURS", "100")

# Optional JSON file replacing the built-in holiday table
HOLIDAY_TABLE_PATH = os.getenv("HOLIDAY_TABLE_PATH")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, database/schema.sql is applied on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
