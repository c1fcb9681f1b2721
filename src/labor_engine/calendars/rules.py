from __future__ import annotations

import math
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import iter_dates
from .model import DEFAULT_HOLIDAY_TABLE, EquinoxEra, HolidayTable


class CalendarRules:
    """Legal (weekly rest day) and national holiday determination.

    Pure; every answer derives from the injected `HolidayTable`.
    """

    def __init__(self, table: Optional[HolidayTable] = None):
        self._table = table or DEFAULT_HOLIDAY_TABLE

    @property
    def table(self) -> HolidayTable:
        return self._table

    def is_legal_holiday(self, day: date) -> bool:
        return day.weekday() == self._table.rest_weekday

    def is_national_holiday(self, day: date) -> bool:
        t = self._table
        if t.is_fixed(day.month, day.day):
            return True

        for rule in t.nth_weekday:
            if rule.month == day.month and day.weekday() == rule.weekday and self._occurrence(day) == rule.nth:
                return True

        if day.month == t.vernal_month and day.day == self.vernal_equinox_day(day.year):
            return True
        if day.month == t.autumnal_month and day.day == self.autumnal_equinox_day(day.year):
            return True
        return False

    def is_holiday(self, day: date) -> bool:
        return self.is_legal_holiday(day) or self.is_national_holiday(day)

    def vernal_equinox_day(self, year: int) -> int:
        era = self._era_for(year)
        if era is None:
            return self._table.default_vernal_day
        return self._equinox(era.vernal_base, era, year)

    def autumnal_equinox_day(self, year: int) -> int:
        era = self._era_for(year)
        if era is None:
            return self._table.default_autumnal_day
        return self._equinox(era.autumnal_base, era, year)

    def count_business_days(self, start: date, end: date) -> int:
        """Mon-Fri dates in [start, end]. National holidays are still counted."""
        return sum(1 for d in iter_dates(start, end) if d.weekday() < 5)

    def _era_for(self, year: int) -> Optional[EquinoxEra]:
        for era in self._table.equinox_eras:
            if era.covers(year):
                return era
        return None

    @staticmethod
    def _equinox(base: Decimal, era: EquinoxEra, year: int) -> int:
        offset = year - era.first_year
        return math.floor(base + era.slope * offset - offset // 4)

    @staticmethod
    def _occurrence(day: date) -> int:
        # 1..7 -> 1st, 8..14 -> 2nd, ...
        return (day.day - 1) // 7 + 1
