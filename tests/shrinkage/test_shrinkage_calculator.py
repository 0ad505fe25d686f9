from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.worktime.worktime.core.enums import BufferPolicy
from src.worktime.worktime.core.exceptions import InvalidBreakWindow, InvalidInterval
from src.worktime.worktime.settings.model import BreakTiming
from src.worktime.worktime.shrinkage.calculator import (
    calculate_break_duration,
    calculate_effective_work_hours,
    calculate_shrinkage,
)

# 2026-02-02 is a Monday
LUNCH = BreakTiming(name="Lunch", start_time="13:00", end_time="14:00")


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 2, 2, hour, minute)


def test_full_day_with_one_lunch_break():
    result = calculate_effective_work_hours(at(9), at(18), [LUNCH])

    assert result.total_logged_minutes == 540
    assert result.total_logged_hours == 9.0
    assert result.break_minutes == 60
    assert result.transition_buffer == 5
    assert result.total_deductions == 65
    assert result.effective_work_minutes == 475
    assert result.effective_work_hours == 7.92
    assert result.shrinkage_percentage == 12.04
    assert result.effective_work_minutes_exact == pytest.approx(475.0)


def test_half_day_without_breaks():
    result = calculate_effective_work_hours(at(9), at(13, 30), [])

    assert result.effective_work_hours == 4.5
    assert result.transition_buffer == 0
    assert result.shrinkage_percentage == 0


def test_break_outside_interval_contributes_nothing():
    early = BreakTiming(name="Breakfast", start_time="07:00", end_time="08:00")
    late = BreakTiming(name="Dinner", start_time="20:00", end_time="21:00")

    assert calculate_break_duration([early, late], at(9), at(18)) == 0


def test_break_inside_interval_counts_fully():
    assert calculate_break_duration([LUNCH], at(9), at(18)) == pytest.approx(60)


def test_partial_overlap_counts_only_the_overlap():
    assert calculate_break_duration([LUNCH], at(13, 30), at(18)) == pytest.approx(30)
    assert calculate_break_duration([LUNCH], at(9), at(13, 20)) == pytest.approx(20)


def test_inactive_break_is_ignored_for_overlap_and_buffer():
    inactive = BreakTiming(name="Lunch", start_time="13:00", end_time="14:00", is_active=False)

    result = calculate_effective_work_hours(at(9), at(18), [inactive])

    assert result.break_minutes == 0
    assert result.transition_buffer == 0
    assert result.effective_work_hours == 9.0


def test_weekday_filtered_break_still_counts_in_buffer_by_default():
    friday_only = BreakTiming(name="Prayer", start_time="13:00", end_time="14:00", days=("friday",))

    result = calculate_effective_work_hours(at(9), at(18), [friday_only])

    assert result.break_minutes == 0
    assert result.transition_buffer == 5


def test_applicable_only_policy_filters_buffer_by_weekday():
    friday_only = BreakTiming(name="Prayer", start_time="13:00", end_time="14:00", days=("friday",))
    monday_only = BreakTiming(name="Standup", start_time="10:00", end_time="10:15", days=("monday",))

    result = calculate_effective_work_hours(
        at(9), at(18), [friday_only, monday_only], buffer_policy=BufferPolicy.APPLICABLE_ONLY
    )

    assert result.break_minutes == 15
    assert result.transition_buffer == 5


def test_explicit_zero_buffer_is_honoured():
    result = calculate_effective_work_hours(at(9), at(18), [LUNCH], transition_buffer=0)

    assert result.transition_buffer == 0
    assert result.effective_work_hours == 8.0


def test_effective_minutes_never_go_negative():
    result = calculate_effective_work_hours(at(13), at(13, 30), [LUNCH])

    assert result.effective_work_minutes == 0
    assert result.effective_work_hours == 0
    assert result.shrinkage_percentage == 100


def test_zero_length_interval():
    result = calculate_effective_work_hours(at(9), at(9), [LUNCH])

    assert result.total_logged_minutes == 0
    assert result.effective_work_hours == 0
    assert result.shrinkage_percentage == 0


def test_check_out_before_check_in_is_rejected():
    with pytest.raises(InvalidInterval):
        calculate_effective_work_hours(at(18), at(9), [LUNCH])


@pytest.mark.parametrize(
    "start,end",
    [("25:00", "26:00"), ("lunch", "14:00"), ("14:00", "13:00"), ("13:00", "13:00")],
)
def test_malformed_break_window_is_rejected(start, end):
    bad = BreakTiming(name="Bad", start_time=start, end_time=end)

    with pytest.raises(InvalidBreakWindow):
        calculate_effective_work_hours(at(9), at(18), [bad])


def test_calculation_is_deterministic():
    first = calculate_effective_work_hours(at(9, 7), at(17, 53), [LUNCH])
    second = calculate_effective_work_hours(at(9, 7), at(17, 53), [LUNCH])

    assert first == second


def test_breaks_are_anchored_in_the_company_time_zone():
    # 03:30Z / 12:30Z are 09:00 / 18:00 in India
    check_in = datetime(2026, 2, 2, 3, 30, tzinfo=timezone.utc)
    check_out = datetime(2026, 2, 2, 12, 30, tzinfo=timezone.utc)

    in_india = calculate_effective_work_hours(check_in, check_out, [LUNCH], tz="Asia/Kolkata")
    in_utc = calculate_effective_work_hours(check_in, check_out, [LUNCH], tz="UTC")

    assert in_india.break_minutes == 60
    assert in_utc.break_minutes == 0


def test_weekday_is_taken_from_check_in_in_company_zone():
    # Sunday 20:00Z is already Monday 01:30 in India
    monday_only = BreakTiming(name="Early", start_time="02:00", end_time="02:30", days=("monday",))
    check_in = datetime(2026, 2, 1, 20, 0, tzinfo=timezone.utc)
    check_out = datetime(2026, 2, 1, 23, 0, tzinfo=timezone.utc)

    assert calculate_break_duration([monday_only], check_in, check_out, tz="Asia/Kolkata") == pytest.approx(30)
    assert calculate_break_duration([monday_only], check_in, check_out, tz="UTC") == 0


@pytest.mark.parametrize(
    "logged,breaks,other,expected",
    [
        (0, 30, 0, 0),
        (-10, 30, 0, 0),
        (100, 25, 0, 25),
        (100, 20, 5, 25),
        (30, 60, 0, 100),
    ],
)
def test_shrinkage_percentage_bounds(logged, breaks, other, expected):
    assert calculate_shrinkage(logged, breaks, other) == pytest.approx(expected)


def test_logged_time_is_elapsed_time_across_dst_start():
    # 00:30 EST -> 09:30 EDT on 2026-03-08 is 8 real hours
    utc_in = datetime(2026, 3, 8, 5, 30, tzinfo=timezone.utc)
    utc_out = datetime(2026, 3, 8, 13, 30, tzinfo=timezone.utc)

    aware = calculate_effective_work_hours(utc_in, utc_out, [], tz="America/New_York")
    wall_clock = calculate_effective_work_hours(
        datetime(2026, 3, 8, 0, 30), datetime(2026, 3, 8, 9, 30), [], tz="America/New_York"
    )

    assert aware.total_logged_minutes == 480
    assert aware.effective_work_hours == 8.0
    assert wall_clock.total_logged_minutes == 480


def test_check_out_after_check_in_across_dst_end_is_accepted():
    # 05:50Z is 01:50 EDT, 06:10Z is 01:10 EST: later instant, earlier wall clock
    check_in = datetime(2026, 11, 1, 5, 50, tzinfo=timezone.utc)
    check_out = datetime(2026, 11, 1, 6, 10, tzinfo=timezone.utc)

    result = calculate_effective_work_hours(check_in, check_out, [], tz="America/New_York")

    assert result.total_logged_minutes == 20


def test_hours_are_rounded_from_the_exact_binary_value():
    # 60.3 minutes is 1.00499.. hours as a float
    result = calculate_effective_work_hours(at(9), datetime(2026, 2, 2, 10, 0, 18), [])

    assert result.total_logged_hours == 1.0
    assert result.effective_work_hours == 1.0
