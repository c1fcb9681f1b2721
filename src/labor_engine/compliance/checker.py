from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from ..core.enums import Severity, ViolationType
from ..core.rules import LaborRules
from .model import Violation

log = logging.getLogger(__name__)


class ComplianceChecker:
    """Monthly working-time limits.

    Overtime above the warning limit is a WARNING, above the critical limit a
    CRITICAL. Total hours above the monthly limit are always CRITICAL.
    """

    def __init__(self, rules: Optional[LaborRules] = None):
        self._rules = rules or LaborRules()

    def check_monthly_violations(self, monthly_hours: Decimal, monthly_overtime_hours: Decimal) -> list[Violation]:
        r = self._rules
        violations: list[Violation] = []

        if monthly_overtime_hours > r.overtime_warning_hours:
            severity = Severity.CRITICAL if monthly_overtime_hours > r.overtime_critical_hours else Severity.WARNING
            violations.append(
                Violation(
                    type=ViolationType.MONTHLY_OVERTIME_LIMIT,
                    severity=severity,
                    message=f"Monthly overtime {monthly_overtime_hours}h exceeds {r.overtime_warning_hours}h",
                    actual_hours=monthly_overtime_hours,
                    limit_hours=r.overtime_warning_hours,
                )
            )

        if monthly_hours > r.monthly_total_limit_hours:
            violations.append(
                Violation(
                    type=ViolationType.MONTHLY_TOTAL_LIMIT,
                    severity=Severity.CRITICAL,
                    message=f"Monthly working time {monthly_hours}h exceeds {r.monthly_total_limit_hours}h",
                    actual_hours=monthly_hours,
                    limit_hours=r.monthly_total_limit_hours,
                )
            )

        for v in violations:
            log.warning("%s %s: %s", v.severity.value, v.type.value, v.message)
        return violations
