from __future__ import annotations

import math
from datetime import datetime

from ..core.exceptions import InvalidCoordinate, InvalidInterval, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_coordinate(latitude, longitude) -> tuple[float, float]:
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        raise InvalidCoordinate(f"Coordinates must be numbers, got ({latitude!r}, {longitude!r})") from None
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidCoordinate(f"Coordinates must be finite, got ({lat}, {lon})")
    if not -90 <= lat <= 90 or not -180 <= lon <= 180:
        raise InvalidCoordinate(f"Coordinates out of range: ({lat}, {lon})")
    return lat, lon


def require_ordered_interval(check_in: datetime, check_out: datetime) -> None:
    if check_out < check_in:
        raise InvalidInterval(f"Check-out {check_out.isoformat()} is before check-in {check_in.isoformat()}")
