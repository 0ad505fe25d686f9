from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...common.numbers import format_number, round_half_up
from ...core.constants import FULL_DAY_FACTOR
from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusThresholds:
    half_day: float
    full_day: float
    required: float

    def to_dict(self) -> dict:
        return {"half_day": self.half_day, "full_day": self.full_day, "required": self.required}


@dataclass(frozen=True)
class AttendanceStatusResult:
    status: AttendanceStatus
    reason: str
    thresholds: StatusThresholds


class StatusPolicy(ABC):
    """Strategy Pattern: how effective hours map to a day verdict.

    Subclasses only decide the half-day threshold and how to word the
    half-day/absent reasons; the full-day band and decision order are shared.
    """

    @abstractmethod
    def half_day_threshold(self, *, full_day_hours: float, half_day_hours: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def half_day_reason(self, worked: str, thresholds: StatusThresholds) -> str:
        raise NotImplementedError

    @abstractmethod
    def absent_reason(self, worked: str, thresholds: StatusThresholds) -> str:
        raise NotImplementedError

    def thresholds(self, *, full_day_hours: float, half_day_hours: float) -> StatusThresholds:
        return StatusThresholds(
            half_day=self.half_day_threshold(full_day_hours=full_day_hours, half_day_hours=half_day_hours),
            full_day=full_day_hours * FULL_DAY_FACTOR,
            required=full_day_hours,
        )

    def decide(self, effective_work_hours: float, *, full_day_hours: float, half_day_hours: float) -> AttendanceStatusResult:
        t = self.thresholds(full_day_hours=full_day_hours, half_day_hours=half_day_hours)
        worked = f"{round_half_up(effective_work_hours, 2):.2f}"

        if effective_work_hours >= t.full_day:
            status = AttendanceStatus.PRESENT
            reason = f"Worked {worked} hours (≥{format_number(t.full_day)}h threshold for full day)"
        elif effective_work_hours >= t.half_day:
            status = AttendanceStatus.HALF_DAY
            reason = self.half_day_reason(worked, t)
        else:
            status = AttendanceStatus.ABSENT
            reason = self.absent_reason(worked, t)

        return AttendanceStatusResult(status=status, reason=reason, thresholds=t)
