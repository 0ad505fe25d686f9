"""Attendance shrinkage calculator.

Shrinkage is the share of logged attendance time that is not productive:
configured breaks overlapping the interval plus a transition buffer per
break. Effective work hours are what remains, never below zero.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import TimezoneLike, at_wall_clock, minutes_between, to_local, to_utc, weekday_name
from ..common.numbers import round_half_up, round_minutes
from ..common.validators import require_ordered_interval
from ..core.constants import DEFAULT_TRANSITION_BUFFER_MINUTES
from ..core.enums import BufferPolicy
from ..settings.model import BreakTiming
from .model import ShrinkageResult


def calculate_break_duration(
    break_timings: Optional[Sequence[BreakTiming]],
    check_in: datetime,
    check_out: datetime,
    *,
    tz: TimezoneLike = None,
) -> float:
    """Minutes of applicable breaks that fall inside [check_in, check_out].

    Breaks are anchored on the check-in's calendar day in `tz`.
    """
    if not break_timings:
        return 0.0

    local_in = to_local(check_in, tz)
    local_out = to_local(check_out, tz)
    day = weekday_name(local_in)

    total = 0.0
    for b in break_timings:
        if not b.is_active or not b.applies_on(day):
            continue

        start, end = b.window()
        break_start = at_wall_clock(local_in.date(), start, tz)
        break_end = at_wall_clock(local_in.date(), end, tz)

        effective_start = max(to_utc(break_start), to_utc(local_in))
        effective_end = min(to_utc(break_end), to_utc(local_out))
        if effective_end > effective_start:
            total += minutes_between(effective_start, effective_end)

    return total


def calculate_shrinkage(
    total_logged_minutes: float,
    break_minutes: float,
    other_deductions_minutes: float = 0,
) -> float:
    """Non-productive share of logged time in percent, within [0, 100]."""
    if total_logged_minutes <= 0:
        return 0.0

    shrinkage = (break_minutes + other_deductions_minutes) / total_logged_minutes * 100
    return min(max(shrinkage, 0.0), 100.0)


def count_buffered_breaks(
    break_timings: Sequence[BreakTiming],
    check_in: datetime,
    *,
    policy: BufferPolicy = BufferPolicy.ALL_ACTIVE,
    tz: TimezoneLike = None,
) -> int:
    active = [b for b in break_timings if b.is_active]
    if policy == BufferPolicy.APPLICABLE_ONLY:
        day = weekday_name(to_local(check_in, tz))
        active = [b for b in active if b.applies_on(day)]
    return len(active)


def calculate_effective_work_hours(
    check_in: datetime,
    check_out: datetime,
    break_timings: Optional[Sequence[BreakTiming]] = (),
    *,
    transition_buffer: Optional[float] = None,
    buffer_per_break: float = DEFAULT_TRANSITION_BUFFER_MINUTES,
    buffer_policy: BufferPolicy = BufferPolicy.ALL_ACTIVE,
    tz: TimezoneLike = None,
) -> ShrinkageResult:
    """Effective work hours of one attendance interval.

    Args:
        check_in: Start of the interval.
        check_out: End of the interval; must not precede `check_in`.
        break_timings: Company break configuration.
        transition_buffer: Explicit buffer in minutes; overrides the
            per-break computation when given (0 included).
        buffer_per_break: Minutes charged for each counted break.
        buffer_policy: Which breaks are counted for the buffer.
        tz: Zone whose calendar day anchors the breaks.

    Raises:
        InvalidInterval: check-out before check-in.
        InvalidBreakWindow: an applicable break is not a valid HH:MM window.
    """
    require_ordered_interval(to_utc(check_in, tz), to_utc(check_out, tz))
    break_timings = tuple(break_timings or ())

    total_logged_minutes = minutes_between(to_local(check_in, tz), to_local(check_out, tz))
    break_minutes = calculate_break_duration(break_timings, check_in, check_out, tz=tz)

    if transition_buffer is None:
        counted = count_buffered_breaks(break_timings, check_in, policy=buffer_policy, tz=tz)
        transition_buffer = counted * buffer_per_break

    total_deductions = break_minutes + transition_buffer
    effective_work_minutes = max(0.0, total_logged_minutes - total_deductions)
    shrinkage = calculate_shrinkage(total_logged_minutes, total_deductions)

    return ShrinkageResult(
        total_logged_hours=round_half_up(total_logged_minutes / 60, 2),
        total_logged_minutes=round_minutes(total_logged_minutes),
        break_minutes=round_minutes(break_minutes),
        transition_buffer=round_minutes(transition_buffer),
        total_deductions=round_minutes(total_deductions),
        effective_work_minutes=round_minutes(effective_work_minutes),
        effective_work_hours=round_half_up(effective_work_minutes / 60, 2),
        shrinkage_percentage=round_half_up(shrinkage, 2),
        effective_work_minutes_exact=effective_work_minutes,
    )
