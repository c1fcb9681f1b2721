from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..compliance.checker import ComplianceChecker
from ..compliance.model import Violation
from .aggregation import HoursTotals, hours_for_month


@dataclass(frozen=True)
class MonthlySummary:
    employee_id: int
    year: int
    month: int
    totals: HoursTotals
    violations: list[Violation]


class MonthlyHoursService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        checker: Optional[ComplianceChecker] = None,
    ):
        self._attendance = attendance
        self._checker = checker or ComplianceChecker()

    def build_monthly_summary(self, employee_id: int, year: int, month: int) -> MonthlySummary:
        start = date(year, month, 1)
        end = date(year, month, calendar.monthrange(year, month)[1])
        records = self._attendance.list_for_employee(employee_id, start_date=start, end_date=end)

        totals = hours_for_month(records, year, month)
        violations = self._checker.check_monthly_violations(totals.work_hours, totals.overtime_hours)
        return MonthlySummary(
            employee_id=employee_id,
            year=year,
            month=month,
            totals=totals,
            violations=violations,
        )
