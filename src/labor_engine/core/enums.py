from __future__ import annotations

from enum import Enum


class SessionState(str, Enum):
    """Lifecycle of one employee-day of attendance."""

    NOT_STARTED = "NOT_STARTED"
    CLOCKED_IN = "CLOCKED_IN"
    ON_BREAK = "ON_BREAK"
    CLOCKED_OUT = "CLOCKED_OUT"


class AttendanceStatus(str, Enum):
    """Attendance status stored on the record."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EARLY_LEAVE = "EARLY_LEAVE"
    VACATION = "VACATION"
    SICK_LEAVE = "SICK_LEAVE"
    BUSINESS_TRIP = "BUSINESS_TRIP"


class LeaveType(str, Enum):
    ANNUAL_LEAVE = "ANNUAL_LEAVE"
    SICK_LEAVE = "SICK_LEAVE"
    SPECIAL_LEAVE = "SPECIAL_LEAVE"


class LeaveStatus(str, Enum):
    """Review workflow of a leave request. Transitions are one-way out of PENDING."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class ViolationType(str, Enum):
    MONTHLY_OVERTIME_LIMIT = "MONTHLY_OVERTIME_LIMIT"
    MONTHLY_TOTAL_LIMIT = "MONTHLY_TOTAL_LIMIT"


class Severity(str, Enum):
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
