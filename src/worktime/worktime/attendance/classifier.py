from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_FULL_DAY_HOURS, DEFAULT_HALF_DAY_HOURS
from ..core.enums import HalfDayRule
from .factory import StatusPolicyFactory
from .strategies.base import AttendanceStatusResult

_factory = StatusPolicyFactory()


def determine_attendance_status(
    effective_work_hours: float,
    *,
    full_day_hours: Optional[float] = DEFAULT_FULL_DAY_HOURS,
    half_day_hours: Optional[float] = DEFAULT_HALF_DAY_HOURS,
    rule: HalfDayRule = HalfDayRule.FIFTY_PERCENT,
) -> AttendanceStatusResult:
    """Classify a day as present / half-day / absent.

    Full-day credit starts at 90% of `full_day_hours`. Unset (None/0) hours
    fall back to the defaults of 8 and 4. Never raises.
    """
    full_day_hours = full_day_hours or DEFAULT_FULL_DAY_HOURS
    half_day_hours = half_day_hours or DEFAULT_HALF_DAY_HOURS
    policy = _factory.for_rule(rule)
    return policy.decide(effective_work_hours, full_day_hours=full_day_hours, half_day_hours=half_day_hours)
