from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from ..calendars.rules import CalendarRules
from ..common.datetime_utils import SECONDS_PER_HOUR, quantize_hours, seconds_between, seconds_to_hours
from ..common.validators import ordered_breaks, require_break_within, require_interval
from ..core.exceptions import InvalidInterval
from ..core.rules import LaborRules
from .model import ZERO, BreakPeriod, DailyHours

_SECONDS_PER_MINUTE = 60


class WorkTimeCalculator:
    """Derives billable, overtime, night and holiday hours from raw punches.

    Durations are summed in exact seconds; each figure is converted to hours
    once, at storage scale (`HOURS_QUANTUM`).
    """

    def __init__(self, calendar: Optional[CalendarRules] = None, rules: Optional[LaborRules] = None):
        self._calendar = calendar or CalendarRules()
        self._rules = rules or LaborRules()

    @property
    def rules(self) -> LaborRules:
        return self._rules

    def compute_work_hours(
        self,
        clock_in: datetime,
        clock_out: datetime,
        break_start: Optional[datetime] = None,
        break_end: Optional[datetime] = None,
    ) -> Decimal:
        breaks = ()
        if break_start is not None and break_end is not None:
            breaks = (BreakPeriod(break_start, break_end),)
        return self.compute_work_hours_with_breaks(clock_in, clock_out, breaks)

    def compute_work_hours_with_breaks(
        self,
        clock_in: datetime,
        clock_out: datetime,
        breaks: Iterable[BreakPeriod] = (),
    ) -> Decimal:
        """Elapsed time minus breaks, with the statutory minimum break enforced.

        A caller-supplied break only counts when it already satisfies the
        minimum for the resulting work duration; otherwise the minimum replaces it.
        """
        require_interval(clock_in, clock_out)
        total = seconds_between(clock_in, clock_out)
        on_break = self._break_seconds(clock_in, clock_out, breaks)

        net = total - on_break
        for rule in self._rules.break_rules:
            min_break = rule.min_break_minutes * _SECONDS_PER_MINUTE
            if net > rule.threshold_hours * SECONDS_PER_HOUR and on_break < min_break:
                return seconds_to_hours(max(ZERO, total - min_break))
        return seconds_to_hours(max(ZERO, net))

    def compute_overtime_hours(self, work_hours: Decimal) -> Decimal:
        return quantize_hours(max(ZERO, work_hours - self._rules.standard_daily_hours))

    def compute_night_hours(self, clock_in: datetime, clock_out: datetime) -> Decimal:
        """Hours inside the night window, walking the interval in hour-aligned slices."""
        require_interval(clock_in, clock_out)
        night_seconds = ZERO
        current = clock_in
        while current < clock_out:
            next_hour = current.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)
            slice_end = min(next_hour, clock_out)
            if self._is_night_hour(current.hour):
                night_seconds += seconds_between(current, slice_end)
            current = slice_end
        return seconds_to_hours(night_seconds)

    def compute_holiday_hours(self, clock_in: datetime, clock_out: datetime, work_date: date) -> Decimal:
        # The whole shift is premium time on a holiday; recorded breaks are not
        # subtracted, only the statutory minimum.
        require_interval(clock_in, clock_out)
        if self._calendar.is_holiday(work_date):
            return self.compute_work_hours(clock_in, clock_out)
        return ZERO

    def compute_daily_hours(
        self,
        clock_in: datetime,
        clock_out: datetime,
        work_date: date,
        breaks: Iterable[BreakPeriod] = (),
    ) -> DailyHours:
        breaks = tuple(breaks)
        work_hours = self.compute_work_hours_with_breaks(clock_in, clock_out, breaks)
        return DailyHours(
            work_hours=work_hours,
            overtime_hours=self.compute_overtime_hours(work_hours),
            night_hours=self.compute_night_hours(clock_in, clock_out),
            holiday_hours=self.compute_holiday_hours(clock_in, clock_out, work_date),
        )

    def _is_night_hour(self, hour: int) -> bool:
        start = self._rules.night_start_hour
        end = self._rules.night_end_hour
        if start > end:
            return hour >= start or hour < end
        return start <= hour < end

    @staticmethod
    def _break_seconds(clock_in: datetime, clock_out: datetime, breaks: Iterable[BreakPeriod]) -> Decimal:
        total = ZERO
        for b in ordered_breaks(breaks):
            if b.end is None:
                raise InvalidInterval("break is still open", start=b.start, end=None)
            require_break_within(b.start, b.end, clock_in, clock_out)
            total += seconds_between(b.start, b.end)
        return total
