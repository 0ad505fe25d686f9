from __future__ import annotations

from datetime import datetime, timezone

from src.worktime.worktime.overtime.calculator import calculate_overtime_hours

SCHEDULED = datetime(2026, 2, 2, 18, 0)


def test_hours_past_the_scheduled_check_out():
    assert calculate_overtime_hours(datetime(2026, 2, 2, 20, 30), SCHEDULED) == 2.5
    assert calculate_overtime_hours(datetime(2026, 2, 2, 18, 20), SCHEDULED) == 0.33


def test_leaving_on_time_or_early_is_no_overtime():
    assert calculate_overtime_hours(SCHEDULED, SCHEDULED) == 0
    assert calculate_overtime_hours(datetime(2026, 2, 2, 17, 0), SCHEDULED) == 0


def test_aware_and_naive_timestamps_share_the_company_zone():
    # 14:30Z is 20:00 in India
    check_out = datetime(2026, 2, 2, 14, 30, tzinfo=timezone.utc)

    assert calculate_overtime_hours(check_out, SCHEDULED, tz="Asia/Kolkata") == 2.0


def test_overtime_across_dst_end_counts_elapsed_time():
    # scheduled 00:30 EDT, left 01:00 EST: 1.5 real hours
    scheduled = datetime(2026, 11, 1, 4, 30, tzinfo=timezone.utc)
    check_out = datetime(2026, 11, 1, 6, 0, tzinfo=timezone.utc)

    assert calculate_overtime_hours(check_out, scheduled, tz="America/New_York") == 1.5
