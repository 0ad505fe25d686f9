from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeofenceLocation:
    """Circular authorised work zone (center + radius in meters).

    An empty `allowed_departments` opens the location to every department.
    """

    location_id: int
    name: str
    center: GeoPoint
    radius: float
    allowed_departments: tuple[int, ...] = ()
    allowed_employees: tuple[int, ...] = ()
    is_active: bool = True


@dataclass(frozen=True)
class GeofenceEvaluation:
    is_within_geofence: bool
    closest_location: Optional[GeofenceLocation]
    min_distance: float
