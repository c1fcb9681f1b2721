from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from labor_engine.core.enums import LeaveStatus, LeaveType
from labor_engine.core.exceptions import (
    AlreadyReviewed,
    InsufficientBalance,
    InvalidInterval,
    NotFoundError,
    OverlappingRequest,
    ValidationError,
)
from labor_engine.employees.model import Employee
from labor_engine.leave.model import LeaveBalance, LeaveRequest
from labor_engine.leave.service import LeaveAccrualEngine

NOW = datetime(2025, 2, 1, 10, 0)


class InMemoryEmployees:
    def __init__(self, *employees: Employee):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)


class InMemoryLeave:
    def __init__(self):
        self.balances: dict[tuple[int, int], LeaveBalance] = {}
        self.requests: dict[int, LeaveRequest] = {}
        self._id = 0
        self.lose_next_review = False

    def get_balance(self, employee_id: int, year: int) -> Optional[LeaveBalance]:
        return self.balances.get((employee_id, year))

    def save_balance(self, balance: LeaveBalance) -> LeaveBalance:
        balance = replace(balance, stored=True)
        self.balances[(balance.employee_id, balance.year)] = balance
        return balance

    def get_request(self, request_id: int) -> Optional[LeaveRequest]:
        return self.requests.get(request_id)

    def find_overlapping(self, employee_id: int, start_date: date, end_date: date) -> Optional[LeaveRequest]:
        for r in sorted(self.requests.values(), key=lambda r: r.request_id):
            if (
                r.employee_id == employee_id
                and r.status in (LeaveStatus.PENDING, LeaveStatus.APPROVED)
                and r.start_date <= end_date
                and start_date <= r.end_date
            ):
                return r
        return None

    def create_request(self, request: LeaveRequest) -> LeaveRequest:
        self._id += 1
        request = replace(request, request_id=self._id)
        self.requests[self._id] = request
        return request

    def save_review(self, request: LeaveRequest, balance: Optional[LeaveBalance] = None) -> bool:
        if self.lose_next_review:
            self.lose_next_review = False
            self.requests[request.request_id] = replace(request, status=LeaveStatus.REJECTED, reviewed_by=7)
            return False
        if self.requests[request.request_id].status != LeaveStatus.PENDING:
            return False
        self.requests[request.request_id] = request
        if balance is not None:
            self.save_balance(balance)
        return True

    def list_requests(self, *, year=None, status=None, employee_id=None):
        return [
            r
            for r in self.requests.values()
            if (year is None or r.start_date.year == year)
            and (status is None or r.status == status)
            and (employee_id is None or r.employee_id == employee_id)
        ]


@pytest.fixture
def leave_repo() -> InMemoryLeave:
    return InMemoryLeave()


@pytest.fixture
def engine(leave_repo) -> LeaveAccrualEngine:
    employees = InMemoryEmployees(
        Employee(employee_id=1, hire_date=date(2015, 4, 1)),  # 20 days in 2025
        Employee(employee_id=2, hire_date=date(2024, 6, 1)),  # 10 days in 2025
    )
    return LeaveAccrualEngine(leave_repo, employees)


def test_balance_is_synthesized_from_tenure(engine, leave_repo):
    balance = engine.get_balance(2, 2025)
    assert balance.annual_granted == Decimal(10)
    assert balance.annual_used == Decimal(0)
    assert not balance.stored
    assert leave_repo.balances == {}


def test_submit_counts_business_days(engine):
    # Friday .. Monday
    req = engine.submit_request(1, date(2025, 3, 7), date(2025, 3, 10), LeaveType.ANNUAL_LEAVE, "trip", now=NOW)
    assert req.status == LeaveStatus.PENDING
    assert req.day_count == Decimal(2)
    assert req.submitted_at == NOW


def test_overlapping_submission_is_rejected(engine):
    first = engine.submit_request(1, date(2025, 3, 3), date(2025, 3, 5), LeaveType.ANNUAL_LEAVE, now=NOW)

    with pytest.raises(OverlappingRequest) as exc:
        engine.submit_request(1, date(2025, 3, 5), date(2025, 3, 7), LeaveType.SICK_LEAVE, now=NOW)

    assert exc.value.conflicting_request_id == first.request_id


def test_touching_ranges_overlap_on_shared_day(engine):
    engine.submit_request(1, date(2025, 3, 3), date(2025, 3, 3), LeaveType.ANNUAL_LEAVE, now=NOW)
    with pytest.raises(OverlappingRequest):
        engine.submit_request(1, date(2025, 3, 3), date(2025, 3, 3), LeaveType.ANNUAL_LEAVE, now=NOW)


def test_insufficient_balance_creates_no_request(engine, leave_repo):
    with pytest.raises(InsufficientBalance) as exc:
        # 11 business days against 10 granted
        engine.submit_request(2, date(2025, 3, 3), date(2025, 3, 17), LeaveType.ANNUAL_LEAVE, now=NOW)

    assert exc.value.requested == Decimal(11)
    assert exc.value.remaining == Decimal(10)
    assert leave_repo.requests == {}


def test_sick_leave_is_not_checked_against_annual_balance(engine):
    req = engine.submit_request(2, date(2025, 3, 3), date(2025, 3, 17), LeaveType.SICK_LEAVE, now=NOW)
    assert req.day_count == Decimal(11)


def test_reversed_range_is_rejected(engine):
    with pytest.raises(InvalidInterval):
        engine.submit_request(1, date(2025, 3, 5), date(2025, 3, 3), LeaveType.ANNUAL_LEAVE)


def test_unknown_employee(engine):
    with pytest.raises(NotFoundError):
        engine.submit_request(42, date(2025, 3, 3), date(2025, 3, 3), LeaveType.ANNUAL_LEAVE)


def test_approval_debits_annual_leave_once(engine, leave_repo):
    req = engine.submit_request(1, date(2025, 3, 3), date(2025, 3, 5), LeaveType.ANNUAL_LEAVE, now=NOW)

    approved = engine.review(req.request_id, LeaveStatus.APPROVED, reviewer_id=9, remarks="ok", now=NOW)

    assert approved.status == LeaveStatus.APPROVED
    assert approved.reviewed_by == 9
    balance = leave_repo.get_balance(1, 2025)
    assert balance.annual_used == Decimal(3)
    assert balance.remaining(LeaveType.ANNUAL_LEAVE) == Decimal(17)

    with pytest.raises(AlreadyReviewed) as exc:
        engine.review(req.request_id, LeaveStatus.APPROVED, reviewer_id=9, now=NOW)
    assert exc.value.status == LeaveStatus.APPROVED
    assert leave_repo.get_balance(1, 2025).annual_used == Decimal(3)


def test_retry_after_recorded_debit_does_not_debit_again(engine, leave_repo):
    req = engine.submit_request(1, date(2025, 3, 3), date(2025, 3, 5), LeaveType.ANNUAL_LEAVE, now=NOW)
    leave_repo.balances[(1, 2025)] = LeaveBalance(
        employee_id=1,
        year=2025,
        annual_granted=Decimal(20),
        annual_used=Decimal(3),
        debited_request_ids=frozenset({req.request_id}),
        stored=True,
    )

    engine.review(req.request_id, LeaveStatus.APPROVED, reviewer_id=9, now=NOW)

    assert leave_repo.get_balance(1, 2025).annual_used == Decimal(3)


def test_rejection_leaves_balance_untouched(engine, leave_repo):
    req = engine.submit_request(1, date(2025, 3, 3), date(2025, 3, 5), LeaveType.ANNUAL_LEAVE, now=NOW)
    rejected = engine.review(req.request_id, LeaveStatus.REJECTED, reviewer_id=9, now=NOW)

    assert rejected.status == LeaveStatus.REJECTED
    assert leave_repo.get_balance(1, 2025) is None


def test_approving_sick_leave_does_not_debit(engine, leave_repo):
    req = engine.submit_request(1, date(2025, 3, 3), date(2025, 3, 5), LeaveType.SICK_LEAVE, now=NOW)
    engine.review(req.request_id, LeaveStatus.APPROVED, reviewer_id=9, now=NOW)
    assert leave_repo.get_balance(1, 2025) is None


def test_approval_beyond_granted_days_is_rejected(engine, leave_repo):
    # both fit individually, together they exceed 10 days
    a = engine.submit_request(2, date(2025, 3, 3), date(2025, 3, 14), LeaveType.ANNUAL_LEAVE, now=NOW)
    b = engine.submit_request(2, date(2025, 4, 1), date(2025, 4, 2), LeaveType.ANNUAL_LEAVE, now=NOW)
    engine.review(a.request_id, LeaveStatus.APPROVED, reviewer_id=9, now=NOW)

    with pytest.raises(InsufficientBalance):
        engine.review(b.request_id, LeaveStatus.APPROVED, reviewer_id=9, now=NOW)

    assert leave_repo.get_request(b.request_id).status == LeaveStatus.PENDING
    assert leave_repo.get_balance(2, 2025).annual_used == Decimal(10)


def test_review_decision_must_be_final(engine):
    req = engine.submit_request(1, date(2025, 3, 3), date(2025, 3, 3), LeaveType.ANNUAL_LEAVE, now=NOW)
    with pytest.raises(ValidationError):
        engine.review(req.request_id, LeaveStatus.PENDING, reviewer_id=9)


def test_lost_review_race_reports_already_reviewed(engine, leave_repo):
    req = engine.submit_request(1, date(2025, 3, 3), date(2025, 3, 3), LeaveType.ANNUAL_LEAVE, now=NOW)
    leave_repo.lose_next_review = True

    with pytest.raises(AlreadyReviewed) as exc:
        engine.review(req.request_id, LeaveStatus.APPROVED, reviewer_id=9, now=NOW)

    assert exc.value.status == LeaveStatus.REJECTED
    assert leave_repo.get_balance(1, 2025) is None


def test_cancel_frees_the_range(engine):
    req = engine.submit_request(1, date(2025, 3, 3), date(2025, 3, 5), LeaveType.ANNUAL_LEAVE, now=NOW)
    cancelled = engine.cancel_request(req.request_id, now=NOW)
    assert cancelled.status == LeaveStatus.CANCELLED

    again = engine.submit_request(1, date(2025, 3, 3), date(2025, 3, 5), LeaveType.ANNUAL_LEAVE, now=NOW)
    assert again.request_id != req.request_id

    with pytest.raises(AlreadyReviewed):
        engine.cancel_request(req.request_id)


def test_initialize_balance_keeps_used_days(engine, leave_repo):
    leave_repo.balances[(1, 2025)] = LeaveBalance(
        employee_id=1, year=2025, annual_granted=Decimal(5), annual_used=Decimal(2), stored=True
    )

    balance = engine.initialize_balance(1, 2025)

    assert balance.annual_granted == Decimal(20)
    assert balance.annual_used == Decimal(2)
    assert leave_repo.get_balance(1, 2025).annual_granted == Decimal(20)


def test_leave_statistics_only_count_approved(engine):
    a = engine.submit_request(1, date(2025, 3, 3), date(2025, 3, 5), LeaveType.ANNUAL_LEAVE, now=NOW)
    engine.submit_request(2, date(2025, 3, 3), date(2025, 3, 4), LeaveType.ANNUAL_LEAVE, now=NOW)
    engine.review(a.request_id, LeaveStatus.APPROVED, reviewer_id=9, now=NOW)

    stats = engine.leave_statistics(2025)

    assert stats.total_days == Decimal(3)
    assert stats.employees_with_leave == 1


def test_balance_summary_covers_every_leave_type(engine):
    summary = engine.get_balance(1, 2025).summary()
    assert set(summary) == set(LeaveType)
    assert summary[LeaveType.ANNUAL_LEAVE].remaining == Decimal(20)
    assert summary[LeaveType.SICK_LEAVE].granted == Decimal(0)
