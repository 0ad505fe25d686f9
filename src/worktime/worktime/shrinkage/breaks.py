from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import TimezoneLike, at_wall_clock, minutes_between, to_local, weekday_name
from ..common.numbers import round_minutes
from ..settings.model import BreakTiming
from .model import BreakWindowStatus, UpcomingBreak


def _applicable(break_timings: Optional[Sequence[BreakTiming]], local_now: datetime) -> list[BreakTiming]:
    day = weekday_name(local_now)
    return [b for b in (break_timings or ()) if b.is_active and b.applies_on(day)]


def is_break_time(
    break_timings: Optional[Sequence[BreakTiming]],
    current_time: datetime,
    *,
    tz: TimezoneLike = None,
) -> BreakWindowStatus:
    """Whether `current_time` falls inside a break (start inclusive, end exclusive)."""
    now = to_local(current_time, tz)
    for b in _applicable(break_timings, now):
        start, end = b.window()
        break_start = at_wall_clock(now.date(), start, tz)
        break_end = at_wall_clock(now.date(), end, tz)
        if break_start <= now < break_end:
            return BreakWindowStatus(
                is_break=True,
                break_name=b.name,
                break_end=break_end,
                remaining_minutes=round_minutes(minutes_between(now, break_end)),
            )
    return BreakWindowStatus(is_break=False)


def get_upcoming_break(
    break_timings: Optional[Sequence[BreakTiming]],
    current_time: datetime,
    *,
    tz: TimezoneLike = None,
) -> Optional[UpcomingBreak]:
    """Nearest break of the current day that has not started yet."""
    now = to_local(current_time, tz)
    best: Optional[UpcomingBreak] = None
    for b in _applicable(break_timings, now):
        start, _ = b.window()
        break_start = at_wall_clock(now.date(), start, tz)
        if break_start <= now:
            continue
        if best is None or break_start < best.starts_at:
            best = UpcomingBreak(
                name=b.name,
                start_time=b.start_time,
                end_time=b.end_time,
                starts_at=break_start,
                starts_in=round_minutes(minutes_between(now, break_start)),
            )
    return best
