from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .constants import (
    DEFAULT_BREAK_RULES,
    DEFAULT_MONTHLY_TOTAL_LIMIT_HOURS,
    DEFAULT_NIGHT_END_HOUR,
    DEFAULT_NIGHT_START_HOUR,
    DEFAULT_OVERTIME_CRITICAL_HOURS,
    DEFAULT_OVERTIME_WARNING_HOURS,
    DEFAULT_STANDARD_DAILY_HOURS,
)


@dataclass(frozen=True)
class BreakRule:
    """Work longer than `threshold_hours` requires at least `min_break_minutes` of rest."""

    threshold_hours: Decimal
    min_break_minutes: int


@dataclass(frozen=True)
class LaborRules:
    """Statutory thresholds used by the calculators and the compliance checker."""

    standard_daily_hours: Decimal = DEFAULT_STANDARD_DAILY_HOURS
    break_rules: tuple[BreakRule, ...] = tuple(BreakRule(h, m) for h, m in DEFAULT_BREAK_RULES)
    night_start_hour: int = DEFAULT_NIGHT_START_HOUR
    night_end_hour: int = DEFAULT_NIGHT_END_HOUR
    overtime_warning_hours: Decimal = DEFAULT_OVERTIME_WARNING_HOURS
    overtime_critical_hours: Decimal = DEFAULT_OVERTIME_CRITICAL_HOURS
    monthly_total_limit_hours: Decimal = DEFAULT_MONTHLY_TOTAL_LIMIT_HOURS

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.break_rules, key=lambda r: r.threshold_hours, reverse=True))
        object.__setattr__(self, "break_rules", ordered)
        for hour in (self.night_start_hour, self.night_end_hour):
            if not 0 <= hour <= 23:
                raise ValueError(f"Night window hour out of range: {hour}")


def parse_break_rules(value: str) -> tuple[BreakRule, ...]:
    """Parse "8:60,6:45" into break rules."""
    rules = []
    for chunk in value.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        hours, _, minutes = chunk.partition(":")
        rules.append(BreakRule(threshold_hours=Decimal(hours.strip()), min_break_minutes=int(minutes)))
    return tuple(rules)
