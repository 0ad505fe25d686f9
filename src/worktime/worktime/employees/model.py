from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: the parts of an employee the work-hours engine reads."""

    employee_id: int
    full_name: str
    department_id: Optional[int]
    is_active: bool = True
