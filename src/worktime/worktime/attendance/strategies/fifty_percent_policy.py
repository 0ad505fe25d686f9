from __future__ import annotations

from ...common.numbers import format_number
from ...core.constants import HALF_DAY_FACTOR
from .base import StatusPolicy, StatusThresholds


class FiftyPercentPolicy(StatusPolicy):
    """Half a day is 50% of the full day; the half-day setting is not consulted."""

    def half_day_threshold(self, *, full_day_hours: float, half_day_hours: float) -> float:
        return full_day_hours * HALF_DAY_FACTOR

    def half_day_reason(self, worked: str, thresholds: StatusThresholds) -> str:
        return (
            f"Worked {worked} hours "
            f"(≥{format_number(thresholds.half_day)}h = 50% of {format_number(thresholds.required)}h)"
        )

    def absent_reason(self, worked: str, thresholds: StatusThresholds) -> str:
        return f"Worked only {worked} hours (<{format_number(thresholds.half_day)}h = 50% threshold)"
