from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time, tzinfo
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_hhmm, resolve_timezone
from ..core.constants import (
    DEFAULT_CHECK_OUT_TIME,
    DEFAULT_FULL_DAY_HOURS,
    DEFAULT_HALF_DAY_HOURS,
    DEFAULT_TIMEZONE,
    DEFAULT_TRANSITION_BUFFER_MINUTES,
)
from ..core.enums import BufferPolicy, GeofenceSelection, HalfDayRule, Weekday
from ..core.exceptions import ConfigurationError, InvalidBreakWindow


@dataclass(frozen=True)
class BreakTiming:
    """A recurring same-day break window (lunch, tea, ...).

    `days` holds lower-case weekday names; empty means every day.
    """

    name: str
    start_time: str
    end_time: str
    days: tuple[str, ...] = ()
    is_active: bool = True

    def window(self) -> tuple[time, time]:
        start = parse_hhmm(self.start_time)
        end = parse_hhmm(self.end_time)
        if start >= end:
            raise InvalidBreakWindow(
                f"Break {self.name!r} must start before it ends ({self.start_time}-{self.end_time})"
            )
        return start, end

    def applies_on(self, weekday: str) -> bool:
        return not self.days or weekday in self.days

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BreakTiming":
        days = data.get("days") or ()
        if isinstance(days, str):
            days = [d for d in days.split(",") if d.strip()]
        return cls(
            name=str(data.get("name") or ""),
            start_time=str(data.get("start_time") or data.get("startTime") or ""),
            end_time=str(data.get("end_time") or data.get("endTime") or ""),
            days=tuple(str(d).strip().lower() for d in days),
            is_active=bool(data.get("is_active", data.get("isActive", True))),
        )


@dataclass(frozen=True)
class CompanySettings:
    """Company-level inputs of the work-hours engine (read-only here)."""

    break_timings: tuple[BreakTiming, ...] = ()
    full_day_hours: float = DEFAULT_FULL_DAY_HOURS
    half_day_hours: float = DEFAULT_HALF_DAY_HOURS
    check_out_time: str = DEFAULT_CHECK_OUT_TIME
    timezone: str = DEFAULT_TIMEZONE
    geofence_enabled: bool = False
    transition_buffer_minutes: float = DEFAULT_TRANSITION_BUFFER_MINUTES
    buffer_policy: BufferPolicy = BufferPolicy.ALL_ACTIVE
    half_day_rule: HalfDayRule = HalfDayRule.FIFTY_PERCENT
    geofence_selection: GeofenceSelection = GeofenceSelection.FIRST_MATCH
    company_id: Optional[int] = field(default=None, compare=False)

    @property
    def tz(self) -> tzinfo:
        return resolve_timezone(self.timezone)

    def scheduled_check_out(self) -> time:
        return parse_hhmm(self.check_out_time)

    def validate(self) -> "CompanySettings":
        """Fail fast on settings the engine cannot work with."""
        if self.full_day_hours is None or self.full_day_hours <= 0:
            raise ConfigurationError(f"full_day_hours must be positive, got {self.full_day_hours!r}")
        if self.half_day_hours is not None and self.half_day_hours < 0:
            raise ConfigurationError(f"half_day_hours must not be negative, got {self.half_day_hours!r}")
        if self.transition_buffer_minutes < 0:
            raise ConfigurationError("transition_buffer_minutes must not be negative")
        resolve_timezone(self.timezone)
        try:
            self.scheduled_check_out()
        except InvalidBreakWindow as e:
            raise ConfigurationError(f"check_out_time: {e}") from e

        known_days = {d.value for d in Weekday}
        for b in self.break_timings:
            unknown = set(b.days) - known_days
            if unknown:
                raise ConfigurationError(f"Break {b.name!r} has unknown days: {sorted(unknown)}")
            try:
                b.window()
            except InvalidBreakWindow as e:
                raise ConfigurationError(str(e)) from e
        return self
