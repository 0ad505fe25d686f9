from __future__ import annotations

from datetime import time

import pytest

from src.worktime.worktime.core.exceptions import ConfigurationError, InvalidBreakWindow
from src.worktime.worktime.settings.model import BreakTiming, CompanySettings


def test_break_from_camel_case_row():
    b = BreakTiming.from_dict({"name": "Lunch", "startTime": "13:00", "endTime": "14:00", "days": "Monday, friday"})

    assert b.start_time == "13:00"
    assert b.days == ("monday", "friday")
    assert b.is_active
    assert b.window() == (time(13, 0), time(14, 0))


def test_break_must_start_before_it_ends():
    with pytest.raises(InvalidBreakWindow):
        BreakTiming(name="Night", start_time="23:00", end_time="01:00").window()


def test_defaults_are_valid():
    settings = CompanySettings().validate()

    assert settings.full_day_hours == 8
    assert settings.scheduled_check_out() == time(18, 0)
    assert str(settings.tz) == "UTC"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"full_day_hours": 0},
        {"half_day_hours": -1},
        {"transition_buffer_minutes": -5},
        {"timezone": "Mars/Olympus"},
        {"check_out_time": "6pm"},
        {"break_timings": (BreakTiming(name="Lunch", start_time="13:00", end_time="14:00", days=("funday",)),)},
        {"break_timings": (BreakTiming(name="Lunch", start_time="14:00", end_time="13:00"),)},
    ],
)
def test_unusable_settings_fail_fast(kwargs):
    with pytest.raises(ConfigurationError):
        CompanySettings(**kwargs).validate()
