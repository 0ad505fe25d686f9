from __future__ import annotations

import pytest

from src.worktime.worktime.attendance.classifier import determine_attendance_status
from src.worktime.worktime.attendance.factory import StatusPolicyFactory
from src.worktime.worktime.attendance.strategies.configured_policy import ConfiguredHalfDayPolicy
from src.worktime.worktime.attendance.strategies.fifty_percent_policy import FiftyPercentPolicy
from src.worktime.worktime.core.enums import AttendanceStatus, HalfDayRule
from src.worktime.worktime.settings.model import CompanySettings


def test_present_reason_and_thresholds():
    result = determine_attendance_status(7.92, full_day_hours=8, half_day_hours=4)

    assert result.status == AttendanceStatus.PRESENT
    assert result.reason == "Worked 7.92 hours (≥7.2h threshold for full day)"
    assert result.thresholds.to_dict() == {"half_day": 4.0, "full_day": 7.2, "required": 8}


def test_half_day_reason():
    result = determine_attendance_status(4.5)

    assert result.status == AttendanceStatus.HALF_DAY
    assert result.reason == "Worked 4.50 hours (≥4h = 50% of 8h)"


def test_absent_reason():
    result = determine_attendance_status(3.5)

    assert result.status == AttendanceStatus.ABSENT
    assert result.reason == "Worked only 3.50 hours (<4h = 50% threshold)"


@pytest.mark.parametrize(
    "hours,expected",
    [
        (7.2, AttendanceStatus.PRESENT),
        (7.19, AttendanceStatus.HALF_DAY),
        (4.0, AttendanceStatus.HALF_DAY),
        (3.99, AttendanceStatus.ABSENT),
        (0, AttendanceStatus.ABSENT),
    ],
)
def test_boundaries_are_inclusive(hours, expected):
    assert determine_attendance_status(hours, full_day_hours=8).status == expected


def test_status_never_drops_as_hours_grow():
    order = [AttendanceStatus.ABSENT, AttendanceStatus.HALF_DAY, AttendanceStatus.PRESENT]
    ranks = [order.index(determine_attendance_status(h / 4).status) for h in range(0, 48)]

    assert ranks == sorted(ranks)


def test_unset_full_day_hours_fall_back_to_eight():
    result = determine_attendance_status(7.3, full_day_hours=None, half_day_hours=0)

    assert result.status == AttendanceStatus.PRESENT
    assert result.thresholds.required == 8


def test_fifty_percent_rule_ignores_configured_half_day():
    result = determine_attendance_status(4.5, full_day_hours=8, half_day_hours=5)

    assert result.status == AttendanceStatus.HALF_DAY


def test_configured_rule_uses_half_day_hours():
    result = determine_attendance_status(4.5, full_day_hours=8, half_day_hours=5, rule=HalfDayRule.CONFIGURED)

    assert result.status == AttendanceStatus.ABSENT
    assert result.reason == "Worked only 4.50 hours (<5h half-day threshold)"

    result = determine_attendance_status(5, full_day_hours=8, half_day_hours=5, rule=HalfDayRule.CONFIGURED)
    assert result.status == AttendanceStatus.HALF_DAY
    assert result.reason == "Worked 5.00 hours (≥5h half-day threshold)"


def test_other_full_day_lengths():
    result = determine_attendance_status(6.75, full_day_hours=7.5)

    assert result.status == AttendanceStatus.PRESENT
    assert result.reason == "Worked 6.75 hours (≥6.75h threshold for full day)"


def test_factory_returns_policy_for_rule_and_settings():
    factory = StatusPolicyFactory()

    assert isinstance(factory.for_rule(HalfDayRule.FIFTY_PERCENT), FiftyPercentPolicy)
    assert isinstance(factory.for_rule(HalfDayRule.CONFIGURED), ConfiguredHalfDayPolicy)
    assert isinstance(
        factory.for_settings(CompanySettings(half_day_rule=HalfDayRule.CONFIGURED)), ConfiguredHalfDayPolicy
    )
