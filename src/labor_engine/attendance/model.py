from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus
from ..worktime.model import ZERO, BreakPeriod


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee-day of attendance.

    Note: This is a plain value object; transitions produce new instances.
    """

    employee_id: int
    work_date: date
    attendance_id: Optional[int] = None
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    breaks: tuple[BreakPeriod, ...] = ()
    work_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    night_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO
    status: Optional[AttendanceStatus] = None
    remarks: Optional[str] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None

    @property
    def open_break(self) -> Optional[BreakPeriod]:
        if self.breaks and self.breaks[-1].is_open:
            return self.breaks[-1]
        return None

    @property
    def break_start(self) -> Optional[datetime]:
        return self.breaks[-1].start if self.breaks else None

    @property
    def break_end(self) -> Optional[datetime]:
        return self.breaks[-1].end if self.breaks else None
