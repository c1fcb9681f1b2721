from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import InsufficientBalance

ZERO = Decimal(0)

_BALANCE_FIELDS = {
    LeaveType.ANNUAL_LEAVE: ("annual_granted", "annual_used"),
    LeaveType.SICK_LEAVE: ("sick_granted", "sick_used"),
    LeaveType.SPECIAL_LEAVE: ("special_granted", "special_used"),
}


@dataclass(frozen=True)
class CategoryBalance:
    granted: Decimal
    used: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.granted - self.used


@dataclass(frozen=True)
class LeaveBalance:
    """Per (employee, year) leave ledger.

    `debited_request_ids` records which approved requests were already charged,
    so applying the same request twice leaves `used` unchanged.
    """

    employee_id: int
    year: int
    annual_granted: Decimal = ZERO
    annual_used: Decimal = ZERO
    sick_granted: Decimal = ZERO
    sick_used: Decimal = ZERO
    special_granted: Decimal = ZERO
    special_used: Decimal = ZERO
    debited_request_ids: frozenset[int] = frozenset()
    stored: bool = False

    def category(self, leave_type: LeaveType) -> CategoryBalance:
        granted_field, used_field = _BALANCE_FIELDS[leave_type]
        return CategoryBalance(granted=getattr(self, granted_field), used=getattr(self, used_field))

    def remaining(self, leave_type: LeaveType) -> Decimal:
        return self.category(leave_type).remaining

    def summary(self) -> dict[LeaveType, CategoryBalance]:
        return {t: self.category(t) for t in LeaveType}

    def has_debited(self, request_id: int) -> bool:
        return request_id in self.debited_request_ids

    def debit(self, leave_type: LeaveType, days: Decimal, *, request_id: int) -> "LeaveBalance":
        if self.has_debited(request_id):
            return self
        current = self.category(leave_type)
        if current.used + days > current.granted:
            raise InsufficientBalance(requested=days, remaining=current.remaining)
        _, used_field = _BALANCE_FIELDS[leave_type]
        return replace(
            self,
            **{used_field: current.used + days},
            debited_request_ids=self.debited_request_ids | {request_id},
        )

    def with_granted(self, leave_type: LeaveType, days: Decimal) -> "LeaveBalance":
        current = self.category(leave_type)
        if current.used > days:
            raise InsufficientBalance(requested=current.used, remaining=days)
        granted_field, _ = _BALANCE_FIELDS[leave_type]
        return replace(self, **{granted_field: days})


@dataclass(frozen=True)
class LeaveRequest:
    employee_id: int
    start_date: date
    end_date: date
    leave_type: LeaveType
    day_count: Decimal
    status: LeaveStatus = LeaveStatus.PENDING
    reason: Optional[str] = None
    request_id: Optional[int] = None
    submitted_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    remarks: Optional[str] = None
