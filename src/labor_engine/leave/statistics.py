from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest

ZERO = Decimal(0)


@dataclass(frozen=True)
class EmployeeLeaveTotals:
    employee_id: int
    total_days: Decimal
    by_type: dict[LeaveType, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class LeaveStatistics:
    year: int
    total_days: Decimal
    employees_with_leave: int
    average_days_per_employee: Decimal
    by_type: dict[LeaveType, Decimal]
    employees: list[EmployeeLeaveTotals]


def summarize_approved_leave(requests: Iterable[LeaveRequest], year: int) -> LeaveStatistics:
    """Yearly totals over APPROVED requests starting in `year`; anything else is ignored."""
    per_employee: dict[int, dict[LeaveType, Decimal]] = {}
    by_type: dict[LeaveType, Decimal] = {}

    for r in requests:
        if r.status != LeaveStatus.APPROVED or r.start_date.year != year:
            continue
        bucket = per_employee.setdefault(r.employee_id, {})
        bucket[r.leave_type] = bucket.get(r.leave_type, ZERO) + r.day_count
        by_type[r.leave_type] = by_type.get(r.leave_type, ZERO) + r.day_count

    employees = [
        EmployeeLeaveTotals(employee_id=emp_id, total_days=sum(types.values(), ZERO), by_type=types)
        for emp_id, types in sorted(per_employee.items())
    ]
    total = sum(by_type.values(), ZERO)
    count = len(employees)
    average = total / count if count else ZERO

    return LeaveStatistics(
        year=year,
        total_days=total,
        employees_with_leave=count,
        average_days_per_employee=average,
        by_type=by_type,
        employees=employees,
    )
