from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class FixedHoliday:
    month: int
    day: int
    name: str = ""


@dataclass(frozen=True)
class NthWeekdayHoliday:
    """The `nth` occurrence of `weekday` (Monday=0) in `month`."""

    month: int
    nth: int
    weekday: int = 0
    name: str = ""


@dataclass(frozen=True)
class EquinoxEra:
    """Coefficients of the approximate equinox formula for years first_year..last_year.

    day = floor(base + slope * (year - first_year) - floor((year - first_year) / 4))
    """

    first_year: int
    last_year: int
    vernal_base: Decimal
    autumnal_base: Decimal
    slope: Decimal

    def covers(self, year: int) -> bool:
        return self.first_year <= year <= self.last_year


@dataclass(frozen=True)
class HolidayTable:
    """Immutable holiday configuration of one jurisdiction."""

    rest_weekday: int = 6
    fixed: tuple[FixedHoliday, ...] = ()
    nth_weekday: tuple[NthWeekdayHoliday, ...] = ()
    equinox_eras: tuple[EquinoxEra, ...] = ()
    vernal_month: int = 3
    autumnal_month: int = 9
    default_vernal_day: int = 20
    default_autumnal_day: int = 23
    _fixed_keys: frozenset = field(init=False, repr=False, compare=False, default=frozenset())

    def __post_init__(self) -> None:
        object.__setattr__(self, "_fixed_keys", frozenset((h.month, h.day) for h in self.fixed))

    def is_fixed(self, month: int, day: int) -> bool:
        return (month, day) in self._fixed_keys


# Reference jurisdiction: Japan.
DEFAULT_HOLIDAY_TABLE = HolidayTable(
    rest_weekday=6,
    fixed=(
        FixedHoliday(1, 1, "New Year's Day"),
        FixedHoliday(2, 11, "National Foundation Day"),
        FixedHoliday(2, 23, "Emperor's Birthday"),
        FixedHoliday(4, 29, "Showa Day"),
        FixedHoliday(5, 3, "Constitution Memorial Day"),
        FixedHoliday(5, 4, "Greenery Day"),
        FixedHoliday(5, 5, "Children's Day"),
        FixedHoliday(8, 11, "Mountain Day"),
        FixedHoliday(11, 3, "Culture Day"),
        FixedHoliday(11, 23, "Labor Thanksgiving Day"),
    ),
    nth_weekday=(
        NthWeekdayHoliday(1, 2, 0, "Coming of Age Day"),
        NthWeekdayHoliday(7, 3, 0, "Marine Day"),
        NthWeekdayHoliday(9, 3, 0, "Respect for the Aged Day"),
        NthWeekdayHoliday(10, 2, 0, "Sports Day"),
    ),
    equinox_eras=(
        EquinoxEra(1851, 1899, Decimal("19.8277"), Decimal("22.7020"), Decimal("0.2422")),
        EquinoxEra(1900, 1979, Decimal("21.124"), Decimal("23.2488"), Decimal("0.2422")),
        EquinoxEra(1980, 2099, Decimal("20.8431"), Decimal("23.2488"), Decimal("0.242194")),
        EquinoxEra(2100, 2150, Decimal("21.8510"), Decimal("24.2488"), Decimal("0.242194")),
    ),
)
