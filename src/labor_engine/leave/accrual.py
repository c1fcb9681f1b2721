from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class SeniorityBand:
    min_years: Decimal
    days: int


@dataclass(frozen=True)
class EntitlementSchedule:
    """Statutory annual leave days by years of service."""

    bands: tuple[SeniorityBand, ...] = (
        SeniorityBand(Decimal("0.5"), 10),
        SeniorityBand(Decimal("1.5"), 11),
        SeniorityBand(Decimal("2.5"), 12),
        SeniorityBand(Decimal("3.5"), 14),
        SeniorityBand(Decimal("4.5"), 16),
        SeniorityBand(Decimal("5.5"), 18),
        SeniorityBand(Decimal("6.5"), 20),
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "bands", tuple(sorted(self.bands, key=lambda b: b.min_years)))

    def days_for(self, tenure_years: Decimal | int) -> int:
        days = 0
        for band in self.bands:
            if tenure_years < band.min_years:
                break
            days = band.days
        return days

    def entitlement_for_tenure(self, hire_date: date, target_year: int) -> int:
        # Tenure is the calendar-year difference, not elapsed time.
        return self.days_for(target_year - hire_date.year)
