from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator

from ..core.constants import HOURS_QUANTUM

_SECONDS_PER_DAY = 86400
_MICROSECONDS = Decimal(1_000_000)
SECONDS_PER_HOUR = Decimal(3600)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def exact_seconds(delta: timedelta) -> Decimal:
    """Exact number of seconds in `delta` (no float rounding)."""
    whole = delta.days * _SECONDS_PER_DAY + delta.seconds
    return Decimal(whole) + Decimal(delta.microseconds) / _MICROSECONDS


def seconds_between(start: datetime, end: datetime) -> Decimal:
    return exact_seconds(end - start)


def quantize_hours(hours: Decimal) -> Decimal:
    return hours.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def seconds_to_hours(seconds: Decimal) -> Decimal:
    """Convert once, at storage scale, so stored and computed figures are identical."""
    return quantize_hours(seconds / SECONDS_PER_HOUR)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
