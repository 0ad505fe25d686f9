from __future__ import annotations

from datetime import datetime

from src.worktime.worktime.settings.model import BreakTiming
from src.worktime.worktime.shrinkage.breaks import get_upcoming_break, is_break_time

BREAKS = [
    BreakTiming(name="Tea", start_time="16:00", end_time="16:15"),
    BreakTiming(name="Lunch", start_time="13:00", end_time="14:00"),
    BreakTiming(name="Friday prayer", start_time="12:00", end_time="12:30", days=("friday",)),
    BreakTiming(name="Old", start_time="11:00", end_time="11:30", is_active=False),
]


def test_inside_a_break_reports_name_and_remaining_minutes():
    status = is_break_time(BREAKS, datetime(2026, 2, 2, 13, 20))

    assert status.is_break
    assert status.break_name == "Lunch"
    assert status.remaining_minutes == 40


def test_break_start_is_inclusive_and_end_exclusive():
    assert is_break_time(BREAKS, datetime(2026, 2, 2, 13, 0)).is_break
    assert not is_break_time(BREAKS, datetime(2026, 2, 2, 14, 0)).is_break


def test_inactive_and_other_weekday_breaks_are_ignored():
    monday = datetime(2026, 2, 2, 11, 10)
    assert not is_break_time(BREAKS, monday).is_break

    friday_noon = datetime(2026, 2, 6, 12, 10)
    assert is_break_time(BREAKS, friday_noon).break_name == "Friday prayer"
    assert not is_break_time(BREAKS, datetime(2026, 2, 2, 12, 10)).is_break


def test_upcoming_break_is_the_nearest_not_yet_started():
    upcoming = get_upcoming_break(BREAKS, datetime(2026, 2, 2, 10, 0))

    assert upcoming is not None
    assert upcoming.name == "Lunch"
    assert upcoming.starts_in == 180


def test_no_upcoming_break_after_the_last_one():
    assert get_upcoming_break(BREAKS, datetime(2026, 2, 2, 16, 5)) is None
    assert get_upcoming_break([], datetime(2026, 2, 2, 8, 0)) is None
