from __future__ import annotations

from datetime import datetime

from ..common.datetime_utils import TimezoneLike, seconds_between, to_local
from ..common.numbers import round_half_up


def calculate_overtime_hours(check_out: datetime, scheduled_check_out: datetime, *, tz: TimezoneLike = None) -> float:
    """Hours worked past the scheduled check-out, 0 when leaving on time or early."""
    seconds = seconds_between(to_local(scheduled_check_out, tz), to_local(check_out, tz))
    if seconds <= 0:
        return 0.0
    return round_half_up(seconds / 3600, 2)
