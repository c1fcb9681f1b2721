from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

from ..common.validators import require_break_within
from ..core.enums import AttendanceStatus, SessionState
from ..core.exceptions import InvalidInterval, InvalidTransition
from ..worktime.calculator import WorkTimeCalculator
from ..worktime.model import BreakPeriod
from .model import AttendanceRecord

log = logging.getLogger(__name__)


def state_of(record: AttendanceRecord) -> SessionState:
    if record.clock_in is None:
        return SessionState.NOT_STARTED
    if record.clock_out is not None:
        return SessionState.CLOCKED_OUT
    if record.open_break is not None:
        return SessionState.ON_BREAK
    return SessionState.CLOCKED_IN


class AttendanceSession:
    """State machine over one employee-day.

    NOT_STARTED -> CLOCKED_IN -> (ON_BREAK <-> CLOCKED_IN)* -> CLOCKED_OUT

    A rejected transition raises `InvalidTransition` and leaves `record` as it
    was. Repeating a transition with the timestamp it already recorded returns
    the current record, so callers may retry safely.
    """

    def __init__(self, record: AttendanceRecord, calculator: Optional[WorkTimeCalculator] = None):
        self._record = record
        self._calculator = calculator or WorkTimeCalculator()

    @property
    def record(self) -> AttendanceRecord:
        return self._record

    @property
    def state(self) -> SessionState:
        return state_of(self._record)

    def clock_in(self, now: datetime) -> AttendanceRecord:
        rec = self._record
        if rec.clock_in == now:
            return self._replayed("clock_in")
        self._require(SessionState.NOT_STARTED, "clock_in")
        return self._commit(replace(rec, clock_in=now, status=AttendanceStatus.PRESENT), "clock_in")

    def start_break(self, now: datetime) -> AttendanceRecord:
        rec = self._record
        if rec.breaks and rec.breaks[-1].start == now:
            return self._replayed("start_break")
        self._require(SessionState.CLOCKED_IN, "start_break")
        last_end = rec.break_end
        if now < rec.clock_in or (last_end is not None and now < last_end):
            raise InvalidInterval("break cannot start before the previous event", start=now)
        return self._commit(replace(rec, breaks=rec.breaks + (BreakPeriod(start=now),)), "start_break")

    def end_break(self, now: datetime) -> AttendanceRecord:
        rec = self._record
        if rec.breaks and rec.breaks[-1].end == now:
            return self._replayed("end_break")
        self._require(SessionState.ON_BREAK, "end_break")
        current = rec.breaks[-1]
        require_break_within(current.start, now, rec.clock_in, None)
        closed = BreakPeriod(start=current.start, end=now)
        return self._commit(replace(rec, breaks=rec.breaks[:-1] + (closed,)), "end_break")

    def clock_out(self, now: datetime) -> AttendanceRecord:
        rec = self._record
        if rec.clock_out == now:
            return self._replayed("clock_out")
        self._require(SessionState.CLOCKED_IN, "clock_out")
        if now <= rec.clock_in:
            raise InvalidInterval("clock_out must be after clock_in", start=rec.clock_in, end=now)

        hours = self._calculator.compute_daily_hours(rec.clock_in, now, rec.work_date, rec.breaks)
        updated = replace(
            rec,
            clock_out=now,
            work_hours=hours.work_hours,
            overtime_hours=hours.overtime_hours,
            night_hours=hours.night_hours,
            holiday_hours=hours.holiday_hours,
        )
        return self._commit(updated, "clock_out")

    def elapsed_working_time(self, now: datetime) -> timedelta:
        """Working time so far: elapsed minus breaks, an open break counted up to `now`."""
        rec = self._record
        if rec.clock_in is None:
            return timedelta(0)
        end = rec.clock_out or now
        on_break = timedelta(0)
        for b in rec.breaks:
            on_break += (b.end or now) - b.start
        return max(timedelta(0), end - rec.clock_in - on_break)

    def _require(self, expected: SessionState, action: str) -> None:
        current = self.state
        if current != expected:
            raise InvalidTransition(current, action)

    def _commit(self, record: AttendanceRecord, action: str) -> AttendanceRecord:
        self._record = record
        log.info(
            "attendance %s employee=%s date=%s state=%s",
            action, record.employee_id, record.work_date, state_of(record).value,
        )
        return record

    def _replayed(self, action: str) -> AttendanceRecord:
        log.debug("attendance %s replayed for employee=%s date=%s", action, self._record.employee_id, self._record.work_date)
        return self._record
