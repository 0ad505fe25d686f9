from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ConfigurationError, InvalidBreakWindow, ValidationError

TimezoneLike = Union[str, tzinfo, None]


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp ('Z' suffix accepted)."""
    text = (value or "").strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid timestamp {value!r}") from None


def parse_hhmm(value: str) -> time:
    """Parse a 24-hour HH:MM wall-clock string."""
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except (TypeError, ValueError):
        raise InvalidBreakWindow(f"Invalid wall-clock time {value!r} (expected HH:MM)") from None


def resolve_timezone(value: TimezoneLike) -> tzinfo:
    if value is None:
        return ZoneInfo(DEFAULT_TIMEZONE)
    if isinstance(value, tzinfo):
        return value
    try:
        return ZoneInfo(str(value))
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigurationError(f"Unknown time zone {value!r}") from None


def to_local(value: datetime, tz: TimezoneLike = None) -> datetime:
    """Express a timestamp in the given zone.

    Naive datetimes are taken as wall-clock times of that zone.
    """
    zone = resolve_timezone(tz)
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def at_wall_clock(day: date, clock: time, tz: TimezoneLike = None) -> datetime:
    return datetime.combine(day, clock, tzinfo=resolve_timezone(tz))


_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def weekday_name(value: datetime) -> str:
    """Lower-case English weekday name, independent of the process locale."""
    return _WEEKDAYS[value.weekday()]


def to_utc(value: datetime, tz: TimezoneLike = None) -> datetime:
    return to_local(value, tz).astimezone(timezone.utc)


def seconds_between(start: datetime, end: datetime) -> float:
    """Elapsed seconds between two aware instants.

    Aware datetimes sharing a tzinfo subtract and compare as wall-clock
    times, so both sides go through UTC.
    """
    return (end.astimezone(timezone.utc) - start.astimezone(timezone.utc)).total_seconds()


def minutes_between(start: datetime, end: datetime) -> float:
    return seconds_between(start, end) / 60


def now_local(tz: TimezoneLike = None) -> datetime:
    """Current time in the given zone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(resolve_timezone(tz))
