from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced employee, record or request does not exist."""


class InvalidInterval(ValidationError):
    """Raised for malformed time ranges, before any computation happens."""

    def __init__(self, message: str, *, start: object = None, end: object = None):
        super().__init__(message)
        self.start = start
        self.end = end


class InvalidTransition(DomainError):
    """Raised when an attendance action is not legal in the current state."""

    def __init__(self, state, action: str):
        super().__init__(f"Cannot {action} while {state.value}")
        self.state = state
        self.action = action


class InsufficientBalance(DomainError):
    def __init__(self, *, requested: Decimal, remaining: Decimal):
        super().__init__(f"Insufficient annual leave balance: requested {requested}, remaining {remaining}")
        self.requested = requested
        self.remaining = remaining


class OverlappingRequest(DomainError):
    def __init__(self, *, conflicting_request_id: Optional[int]):
        super().__init__("Overlapping leave request exists")
        self.conflicting_request_id = conflicting_request_id


class AlreadyReviewed(DomainError):
    def __init__(self, *, request_id: int, status, reviewed_at: Optional[datetime] = None):
        super().__init__(f"Leave request {request_id} already reviewed ({status.value})")
        self.request_id = request_id
        self.status = status
        self.reviewed_at = reviewed_at
