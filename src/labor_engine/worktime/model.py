from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

ZERO = Decimal(0)


@dataclass(frozen=True)
class BreakPeriod:
    start: datetime
    end: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class DailyHours:
    """Hour figures of one worked day, as handed to payroll."""

    work_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    night_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO
