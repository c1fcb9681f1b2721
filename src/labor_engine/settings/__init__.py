"""Environment-selected settings.

`APP_ENV` picks one of the sibling modules; each exposes plain module-level
constants read from the environment.
"""

from __future__ import annotations

import os
from decimal import Decimal
from types import ModuleType
from typing import Optional

from ..calendars.loader import load_holiday_table
from ..calendars.model import DEFAULT_HOLIDAY_TABLE, HolidayTable
from ..core.rules import LaborRules, parse_break_rules


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "labor_engine.settings.production"

    if env in {"test", "testing"}:
        return "labor_engine.settings.testing"

    return "labor_engine.settings.development"


def build_labor_rules(settings: ModuleType) -> LaborRules:
    defaults = LaborRules()
    break_rules = getattr(settings, "BREAK_RULES", None)
    return LaborRules(
        standard_daily_hours=Decimal(str(getattr(settings, "STANDARD_DAILY_HOURS", defaults.standard_daily_hours))),
        break_rules=parse_break_rules(break_rules) if break_rules else defaults.break_rules,
        night_start_hour=int(getattr(settings, "NIGHT_START_HOUR", defaults.night_start_hour)),
        night_end_hour=int(getattr(settings, "NIGHT_END_HOUR", defaults.night_end_hour)),
        overtime_warning_hours=Decimal(
            str(getattr(settings, "OVERTIME_WARNING_HOURS", defaults.overtime_warning_hours))
        ),
        overtime_critical_hours=Decimal(
            str(getattr(settings, "OVERTIME_CRITICAL_HOURS", defaults.overtime_critical_hours))
        ),
        monthly_total_limit_hours=Decimal(
            str(getattr(settings, "MONTHLY_TOTAL_LIMIT_HOURS", defaults.monthly_total_limit_hours))
        ),
    )


def build_holiday_table(settings: ModuleType) -> HolidayTable:
    path: Optional[str] = getattr(settings, "HOLIDAY_TABLE_PATH", None)
    if not path:
        return DEFAULT_HOLIDAY_TABLE
    return load_holiday_table(path)
