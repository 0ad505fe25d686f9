from __future__ import annotations

from ...common.numbers import format_number
from .base import StatusPolicy, StatusThresholds


class ConfiguredHalfDayPolicy(StatusPolicy):
    """Half-day threshold taken from the company's half-day hours."""

    def half_day_threshold(self, *, full_day_hours: float, half_day_hours: float) -> float:
        return half_day_hours

    def half_day_reason(self, worked: str, thresholds: StatusThresholds) -> str:
        return f"Worked {worked} hours (≥{format_number(thresholds.half_day)}h half-day threshold)"

    def absent_reason(self, worked: str, thresholds: StatusThresholds) -> str:
        return f"Worked only {worked} hours (<{format_number(thresholds.half_day)}h half-day threshold)"
