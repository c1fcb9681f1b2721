from __future__ import annotations

from datetime import date
from decimal import Decimal

from labor_engine.core.enums import LeaveStatus, LeaveType
from labor_engine.leave.model import LeaveRequest
from labor_engine.leave.statistics import summarize_approved_leave


def _req(employee_id, start, days, leave_type=LeaveType.ANNUAL_LEAVE, status=LeaveStatus.APPROVED):
    return LeaveRequest(
        employee_id=employee_id,
        start_date=start,
        end_date=start,
        leave_type=leave_type,
        day_count=Decimal(days),
        status=status,
    )


def test_summarize_approved_leave():
    requests = [
        _req(1, date(2025, 3, 3), 3),
        _req(1, date(2025, 5, 1), 1, LeaveType.SICK_LEAVE),
        _req(2, date(2025, 6, 2), 2),
        _req(2, date(2025, 7, 1), 5, status=LeaveStatus.REJECTED),
        _req(3, date(2024, 12, 2), 4),
    ]

    stats = summarize_approved_leave(requests, 2025)

    assert stats.total_days == Decimal(6)
    assert stats.employees_with_leave == 2
    assert stats.average_days_per_employee == Decimal(3)
    assert stats.by_type == {LeaveType.ANNUAL_LEAVE: Decimal(5), LeaveType.SICK_LEAVE: Decimal(1)}
    assert [e.employee_id for e in stats.employees] == [1, 2]
    assert stats.employees[0].total_days == Decimal(4)


def test_summarize_with_nothing_approved():
    stats = summarize_approved_leave([], 2025)
    assert stats.total_days == Decimal(0)
    assert stats.average_days_per_employee == Decimal(0)
