from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Day verdict stored on an attendance record."""

    PRESENT = "present"
    HALF_DAY = "half-day"
    ABSENT = "absent"
    IN_PROGRESS = "in-progress"


class CheckoutKind(str, Enum):
    """How an open attendance record was closed."""

    MANUAL = "manual"
    AUTO_GEOFENCE = "auto-geofence"
    OVERTIME = "overtime"
    AUTO_CORRECTED = "auto-corrected"


class OvertimeStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "overtime-confirmed"
    MANUAL_CHECKOUT = "manual-checkout"
    AUTO_CHECKOUT = "auto-checkout"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class BufferPolicy(str, Enum):
    """Which breaks count towards the transition buffer.

    ALL_ACTIVE counts every active break whatever its weekdays, which is how
    records already stored were computed. APPLICABLE_ONLY filters by weekday
    the same way the break overlap does.
    """

    ALL_ACTIVE = "all-active"
    APPLICABLE_ONLY = "applicable-only"


class HalfDayRule(str, Enum):
    """Where the half-day threshold comes from.

    FIFTY_PERCENT uses half of the full day and ignores the half-day setting.
    CONFIGURED uses the company's half-day hours as the threshold.
    """

    FIFTY_PERCENT = "fifty-percent"
    CONFIGURED = "configured"


class GeofenceSelection(str, Enum):
    FIRST_MATCH = "first-match"
    NEAREST_MATCH = "nearest-match"
