from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Employee:
    """Domain entity: the slice of the employee record the engine reads.

    Employee management itself lives in the surrounding service.
    """

    employee_id: int
    hire_date: date
