from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ..core.exceptions import InvalidInterval
from ..worktime.model import BreakPeriod


def require_interval(start: datetime, end: datetime, *, label: str = "clock_out") -> None:
    if end < start:
        raise InvalidInterval(f"{label} must not be before its start", start=start, end=end)


def require_break_within(
    break_start: datetime,
    break_end: Optional[datetime],
    clock_in: datetime,
    clock_out: Optional[datetime],
) -> None:
    """A break must start after clock-in and, once closed, end inside the shift."""
    if break_start < clock_in:
        raise InvalidInterval("break starts before clock_in", start=break_start, end=break_end)
    if break_end is not None:
        require_interval(break_start, break_end, label="break_end")
    if clock_out is not None:
        last = break_end if break_end is not None else break_start
        if last > clock_out:
            raise InvalidInterval("break ends after clock_out", start=break_start, end=break_end)


def ordered_breaks(breaks: Iterable[BreakPeriod]) -> tuple[BreakPeriod, ...]:
    """Sort breaks by start; overlapping breaks, or an open break before the last, are rejected."""
    ordered = tuple(sorted(breaks, key=lambda b: b.start))
    for prev, cur in zip(ordered, ordered[1:]):
        if prev.end is None or cur.start < prev.end:
            raise InvalidInterval("breaks overlap", start=cur.start, end=prev.end)
    return ordered
