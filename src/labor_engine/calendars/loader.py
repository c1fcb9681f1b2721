"""Load a `HolidayTable` override from a JSON file.

Expected shape (every key optional, missing keys keep the defaults):

    {
      "rest_weekday": 6,
      "fixed": [{"month": 1, "day": 1, "name": "New Year's Day"}],
      "nth_weekday": [{"month": 1, "nth": 2, "weekday": 0}],
      "equinox_eras": [{"first_year": 1980, "last_year": 2099,
                        "vernal_base": "20.8431", "autumnal_base": "23.2488",
                        "slope": "0.242194"}],
      "default_vernal_day": 20,
      "default_autumnal_day": 23
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from pathlib import Path

from ..core.exceptions import ValidationError
from .model import DEFAULT_HOLIDAY_TABLE, EquinoxEra, FixedHoliday, HolidayTable, NthWeekdayHoliday

log = logging.getLogger(__name__)


def load_holiday_table(path: str | Path, *, base: HolidayTable = DEFAULT_HOLIDAY_TABLE) -> HolidayTable:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid holiday table {path}: {e}") from e
    table = holiday_table_from_dict(data, base=base)
    log.info("Loaded holiday table from %s (%d fixed, %d nth-weekday)", path, len(table.fixed), len(table.nth_weekday))
    return table


def holiday_table_from_dict(data: dict, *, base: HolidayTable = DEFAULT_HOLIDAY_TABLE) -> HolidayTable:
    """Missing keys keep `base`; a malformed entry raises `ValidationError`."""
    try:
        return replace(base, **_changes_from_dict(data))
    except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation) as e:
        raise ValidationError(f"Invalid holiday table entry: {e!r}") from e


def _changes_from_dict(data: dict) -> dict:
    changes: dict = {}
    if "rest_weekday" in data:
        changes["rest_weekday"] = int(data["rest_weekday"])
    if "fixed" in data:
        changes["fixed"] = tuple(
            FixedHoliday(int(h["month"]), int(h["day"]), h.get("name", "")) for h in data["fixed"]
        )
    if "nth_weekday" in data:
        changes["nth_weekday"] = tuple(
            NthWeekdayHoliday(int(h["month"]), int(h["nth"]), int(h.get("weekday", 0)), h.get("name", ""))
            for h in data["nth_weekday"]
        )
    if "equinox_eras" in data:
        changes["equinox_eras"] = tuple(
            EquinoxEra(
                first_year=int(e["first_year"]),
                last_year=int(e["last_year"]),
                vernal_base=Decimal(str(e["vernal_base"])),
                autumnal_base=Decimal(str(e["autumnal_base"])),
                slope=Decimal(str(e["slope"])),
            )
            for e in data["equinox_eras"]
        )
    for key in ("default_vernal_day", "default_autumnal_day", "vernal_month", "autumnal_month"):
        if key in data:
            changes[key] = int(data[key])
    return changes
