"""Hour totals over attendance records, as handed to payroll.

Every function here is a pure fold; records without hours contribute zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from functools import reduce
from typing import Iterable

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus

ZERO = Decimal(0)


@dataclass(frozen=True)
class HoursTotals:
    work_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    night_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO
    days_worked: int = 0
    absent_days: int = 0
    late_days: int = 0

    def add(self, record: AttendanceRecord) -> "HoursTotals":
        return HoursTotals(
            work_hours=self.work_hours + record.work_hours,
            overtime_hours=self.overtime_hours + record.overtime_hours,
            night_hours=self.night_hours + record.night_hours,
            holiday_hours=self.holiday_hours + record.holiday_hours,
            days_worked=self.days_worked + (1 if record.clock_in is not None else 0),
            absent_days=self.absent_days + (1 if record.status == AttendanceStatus.ABSENT else 0),
            late_days=self.late_days + (1 if record.status == AttendanceStatus.LATE else 0),
        )


def aggregate_hours(records: Iterable[AttendanceRecord]) -> HoursTotals:
    return reduce(lambda acc, r: acc.add(r), records, HoursTotals())


def hours_for_month(records: Iterable[AttendanceRecord], year: int, month: int) -> HoursTotals:
    return aggregate_hours(r for r in records if r.work_date.year == year and r.work_date.month == month)


def hours_for_week(records: Iterable[AttendanceRecord], week_end: date) -> HoursTotals:
    """Rolling seven days ending on `week_end` (inclusive)."""
    week_start = week_end - timedelta(days=6)
    return aggregate_hours(r for r in records if week_start <= r.work_date <= week_end)
