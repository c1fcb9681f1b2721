from __future__ import annotations

from datetime import date
from decimal import Decimal

from labor_engine.attendance.model import AttendanceRecord
from labor_engine.core.enums import Severity, ViolationType
from labor_engine.payroll.service import MonthlyHoursService


class InMemoryAttendance:
    def __init__(self, records):
        self._records = list(records)
        self.ranges = []

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date):
        self.ranges.append((start_date, end_date))
        return [r for r in self._records if r.employee_id == employee_id and start_date <= r.work_date <= end_date]


def test_monthly_summary_folds_and_checks():
    records = [
        AttendanceRecord(
            employee_id=1,
            work_date=date(2024, 2, d),
            work_hours=Decimal(10),
            overtime_hours=Decimal(2),
        )
        for d in range(1, 29)
    ]
    records.append(AttendanceRecord(employee_id=2, work_date=date(2024, 2, 1), work_hours=Decimal(8)))
    repo = InMemoryAttendance(records)

    summary = MonthlyHoursService(repo).build_monthly_summary(1, 2024, 2)

    assert repo.ranges == [(date(2024, 2, 1), date(2024, 2, 29))]
    assert summary.totals.work_hours == Decimal(280)
    assert summary.totals.overtime_hours == Decimal(56)
    assert {(v.type, v.severity) for v in summary.violations} == {
        (ViolationType.MONTHLY_OVERTIME_LIMIT, Severity.WARNING),
        (ViolationType.MONTHLY_TOTAL_LIMIT, Severity.CRITICAL),
    }


def test_quiet_month_has_no_violations():
    repo = InMemoryAttendance([AttendanceRecord(employee_id=1, work_date=date(2025, 3, 3), work_hours=Decimal(8))])
    summary = MonthlyHoursService(repo).build_monthly_summary(1, 2025, 3)
    assert summary.violations == []
    assert summary.totals.days_worked == 0
