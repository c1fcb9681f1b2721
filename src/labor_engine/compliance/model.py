from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.enums import Severity, ViolationType


@dataclass(frozen=True)
class Violation:
    type: ViolationType
    severity: Severity
    message: str
    actual_hours: Decimal
    limit_hours: Decimal
