from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import ordered_breaks, require_break_within, require_interval
from ..core.enums import AttendanceStatus, SessionState
from ..core.exceptions import InvalidInterval, NotFoundError
from ..worktime.calculator import WorkTimeCalculator
from ..worktime.model import BreakPeriod, DailyHours
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .session import AttendanceSession

log = logging.getLogger(__name__)


class AttendanceService:
    """Punch handling for one employee-day on top of the storage collaborator.

    Callers serialize writers per (employee_id, work_date); every punch is
    safe to retry with the same timestamp.
    """

    def __init__(self, attendance: AttendanceRepository, calculator: Optional[WorkTimeCalculator] = None):
        self._attendance = attendance
        self._calculator = calculator or WorkTimeCalculator()

    def clock_in(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        session = self._session(employee_id, now.date())
        before = session.record
        return self._persist(before, session.clock_in(now))

    def start_break(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        session = self._open_session(employee_id, now)
        before = session.record
        return self._persist(before, session.start_break(now))

    def end_break(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        session = self._open_session(employee_id, now)
        before = session.record
        return self._persist(before, session.end_break(now))

    def clock_out(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        session = self._open_session(employee_id, now)
        before = session.record
        return self._persist(before, session.clock_out(now))

    def elapsed_working_time(self, employee_id: int, *, now: datetime | None = None) -> timedelta:
        now = now or now_local()
        return self._open_session(employee_id, now).elapsed_working_time(now)

    def get_today_record(self, employee_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_employee_and_date(employee_id, today)

    def list_records(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        if end_date < start_date:
            raise InvalidInterval("end_date must be >= start_date", start=start_date, end=end_date)
        return self._attendance.list_for_employee(employee_id, start_date=start_date, end_date=end_date)

    def correct_record(
        self,
        *,
        employee_id: int,
        work_date: date,
        clock_in: datetime,
        clock_out: Optional[datetime],
        breaks: Sequence[BreakPeriod] = (),
        status: Optional[AttendanceStatus] = None,
        remarks: Optional[str] = None,
        approved_by: Optional[int] = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """Administrative override of a day's punches; hour figures are recomputed."""
        record = self._attendance.get_for_employee_and_date(employee_id, work_date)
        if record is None:
            raise NotFoundError(f"No attendance record for employee {employee_id} on {work_date}")

        if clock_out is not None:
            require_interval(clock_in, clock_out)
            if clock_out == clock_in:
                raise InvalidInterval("clock_out must be after clock_in", start=clock_in, end=clock_out)
        breaks = ordered_breaks(breaks)
        for b in breaks:
            if clock_out is not None and b.is_open:
                raise InvalidInterval("closed day cannot have an open break", start=b.start)
            require_break_within(b.start, b.end, clock_in, clock_out)

        hours = DailyHours()
        if clock_out is not None:
            hours = self._calculator.compute_daily_hours(clock_in, clock_out, work_date, breaks)

        corrected = replace(
            record,
            clock_in=clock_in,
            clock_out=clock_out,
            breaks=breaks,
            work_hours=hours.work_hours,
            overtime_hours=hours.overtime_hours,
            night_hours=hours.night_hours,
            holiday_hours=hours.holiday_hours,
            status=status or record.status,
            remarks=remarks if remarks is not None else record.remarks,
            approved_by=approved_by,
            approved_at=(now or now_local()) if approved_by is not None else None,
        )
        log.info("attendance corrected employee=%s date=%s by=%s", employee_id, work_date, approved_by)
        return self._attendance.save(corrected)

    def _session(self, employee_id: int, work_date: date) -> AttendanceSession:
        record = self._attendance.get_for_employee_and_date(employee_id, work_date)
        if record is None:
            record = AttendanceRecord(employee_id=employee_id, work_date=work_date)
        return AttendanceSession(record, self._calculator)

    def _open_session(self, employee_id: int, now: datetime) -> AttendanceSession:
        # A night shift clocked in yesterday is still the current session after midnight.
        session = self._session(employee_id, now.date())
        if session.state == SessionState.NOT_STARTED:
            previous = self._session(employee_id, now.date() - timedelta(days=1))
            if previous.state in (SessionState.CLOCKED_IN, SessionState.ON_BREAK) or previous.record.clock_out == now:
                return previous
        return session

    def _persist(self, before: AttendanceRecord, after: AttendanceRecord) -> AttendanceRecord:
        # Replayed transitions hand back the same record; nothing to write.
        if after is before:
            return after
        return self._attendance.save(after)
