from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..calendars.rules import CalendarRules
from ..common.datetime_utils import now_local
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import (
    AlreadyReviewed,
    InsufficientBalance,
    InvalidInterval,
    NotFoundError,
    OverlappingRequest,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from .accrual import EntitlementSchedule
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveRepository
from .statistics import LeaveStatistics, summarize_approved_leave

log = logging.getLogger(__name__)

_DECISIONS = (LeaveStatus.APPROVED, LeaveStatus.REJECTED)


class LeaveAccrualEngine:
    """Annual leave entitlement, balances and the request lifecycle.

    Only ANNUAL_LEAVE is checked against and debited from the balance.
    Sick and special leave are recorded without touching it.
    """

    def __init__(
        self,
        leave: LeaveRepository,
        employees: EmployeeRepository,
        calendar: Optional[CalendarRules] = None,
        schedule: Optional[EntitlementSchedule] = None,
    ):
        self._leave = leave
        self._employees = employees
        self._calendar = calendar or CalendarRules()
        self._schedule = schedule or EntitlementSchedule()

    def entitlement_for_tenure(self, hire_date: date, target_year: int) -> int:
        return self._schedule.entitlement_for_tenure(hire_date, target_year)

    def get_balance(self, employee_id: int, year: int) -> LeaveBalance:
        balance = self._leave.get_balance(employee_id, year)
        if balance is not None:
            return balance
        return self._synthesized_balance(employee_id, year)

    def initialize_balance(self, employee_id: int, year: int) -> LeaveBalance:
        """(Re)grant annual leave from tenure; used days are kept."""
        employee = self._require_employee(employee_id)
        days = Decimal(self.entitlement_for_tenure(employee.hire_date, year))
        current = self._leave.get_balance(employee_id, year) or LeaveBalance(employee_id=employee_id, year=year)
        saved = self._leave.save_balance(current.with_granted(LeaveType.ANNUAL_LEAVE, days))
        log.info("leave balance initialized employee=%s year=%s annual=%s", employee_id, year, days)
        return saved

    def submit_request(
        self,
        employee_id: int,
        start_date: date,
        end_date: date,
        leave_type: LeaveType,
        reason: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> LeaveRequest:
        if end_date < start_date:
            raise InvalidInterval("end_date must be >= start_date", start=start_date, end=end_date)
        self._require_employee(employee_id)

        days = Decimal(self._calendar.count_business_days(start_date, end_date))

        if leave_type == LeaveType.ANNUAL_LEAVE:
            remaining = self.get_balance(employee_id, start_date.year).remaining(LeaveType.ANNUAL_LEAVE)
            if remaining < days:
                raise InsufficientBalance(requested=days, remaining=remaining)

        conflict = self._leave.find_overlapping(employee_id, start_date, end_date)
        if conflict is not None:
            raise OverlappingRequest(conflicting_request_id=conflict.request_id)

        created = self._leave.create_request(
            LeaveRequest(
                employee_id=employee_id,
                start_date=start_date,
                end_date=end_date,
                leave_type=leave_type,
                day_count=days,
                reason=reason,
                submitted_at=now or now_local(),
            )
        )
        log.info(
            "leave request submitted id=%s employee=%s type=%s days=%s",
            created.request_id,
            employee_id,
            leave_type.value,
            days,
        )
        return created

    def review(
        self,
        request_id: int,
        decision: LeaveStatus,
        *,
        reviewer_id: int,
        remarks: Optional[str] = None,
        now: datetime | None = None,
    ) -> LeaveRequest:
        if decision not in _DECISIONS:
            raise ValidationError("decision must be APPROVED or REJECTED")

        request = self._require_request(request_id)
        if request.status != LeaveStatus.PENDING:
            raise AlreadyReviewed(request_id=request_id, status=request.status, reviewed_at=request.reviewed_at)

        balance = None
        if decision == LeaveStatus.APPROVED and request.leave_type == LeaveType.ANNUAL_LEAVE:
            current = self.get_balance(request.employee_id, request.start_date.year)
            balance = current.debit(LeaveType.ANNUAL_LEAVE, request.day_count, request_id=request_id)
            if balance is current:
                log.debug("leave request %s already debited", request_id)

        decided = replace(
            request,
            status=decision,
            remarks=remarks,
            reviewed_by=reviewer_id,
            reviewed_at=now or now_local(),
        )
        if not self._leave.save_review(decided, balance):
            # Lost a race with another reviewer.
            latest = self._require_request(request_id)
            raise AlreadyReviewed(request_id=request_id, status=latest.status, reviewed_at=latest.reviewed_at)

        log.info("leave request %s %s by=%s", request_id, decision.value.lower(), reviewer_id)
        return decided

    def cancel_request(self, request_id: int, *, now: datetime | None = None) -> LeaveRequest:
        """Withdraw a PENDING request; nothing was debited yet."""
        request = self._require_request(request_id)
        if request.status != LeaveStatus.PENDING:
            raise AlreadyReviewed(request_id=request_id, status=request.status, reviewed_at=request.reviewed_at)

        cancelled = replace(request, status=LeaveStatus.CANCELLED, reviewed_at=now or now_local())
        if not self._leave.save_review(cancelled):
            latest = self._require_request(request_id)
            raise AlreadyReviewed(request_id=request_id, status=latest.status, reviewed_at=latest.reviewed_at)
        log.info("leave request %s cancelled", request_id)
        return cancelled

    def list_requests(
        self,
        *,
        year: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        return self._leave.list_requests(year=year, status=status, employee_id=employee_id)

    def leave_statistics(self, year: int) -> LeaveStatistics:
        approved = self._leave.list_requests(year=year, status=LeaveStatus.APPROVED)
        return summarize_approved_leave(approved, year)

    def _synthesized_balance(self, employee_id: int, year: int) -> LeaveBalance:
        employee = self._require_employee(employee_id)
        days = Decimal(self.entitlement_for_tenure(employee.hire_date, year))
        return LeaveBalance(employee_id=employee_id, year=year, annual_granted=days)

    def _require_employee(self, employee_id: int):
        employee = self._employees.get_by_id(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def _require_request(self, request_id: int) -> LeaveRequest:
        request = self._leave.get_request(request_id)
        if request is None:
            raise NotFoundError(f"Leave request {request_id} not found")
        return request
