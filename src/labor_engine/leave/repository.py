from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveBalance, LeaveRequest


class LeaveRepository(Protocol):
    # Balances
    def get_balance(self, employee_id: int, year: int) -> Optional[LeaveBalance]:
        raise NotImplementedError

    def save_balance(self, balance: LeaveBalance) -> LeaveBalance:
        raise NotImplementedError

    # Requests
    def get_request(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def find_overlapping(self, employee_id: int, start_date: date, end_date: date) -> Optional[LeaveRequest]:
        """First PENDING/APPROVED request of the employee intersecting [start_date, end_date]."""

        raise NotImplementedError

    def create_request(self, request: LeaveRequest) -> LeaveRequest:
        raise NotImplementedError

    def save_review(self, request: LeaveRequest, balance: Optional[LeaveBalance] = None) -> bool:
        """Persist the decided request and, if given, the debited balance as one unit.

        Returns False (and writes nothing) when the stored request is no longer PENDING.
        """

        raise NotImplementedError

    def list_requests(
        self,
        *,
        year: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError
