from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ShrinkageResult:
    """Work-hours breakdown of one attendance interval.

    Hour and percentage fields are rounded to 2 decimals and minute fields to
    whole minutes for storage/display; `effective_work_minutes_exact` keeps
    the unrounded value for further calculations.
    """

    total_logged_hours: float
    total_logged_minutes: int
    break_minutes: int
    transition_buffer: int
    total_deductions: int
    effective_work_minutes: int
    effective_work_hours: float
    shrinkage_percentage: float
    effective_work_minutes_exact: float

    def to_dict(self) -> dict:
        data = asdict(self)
        data.pop("effective_work_minutes_exact")
        return data


@dataclass(frozen=True)
class BreakWindowStatus:
    is_break: bool
    break_name: Optional[str] = None
    break_end: Optional[datetime] = None
    remaining_minutes: Optional[int] = None


@dataclass(frozen=True)
class UpcomingBreak:
    name: str
    start_time: str
    end_time: str
    starts_at: datetime
    starts_in: int
