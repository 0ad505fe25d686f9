from __future__ import annotations

import math
from typing import Iterable, Optional

from ..common.validators import require_coordinate
from ..core.constants import EARTH_RADIUS_METERS
from ..core.enums import GeofenceSelection
from ..employees.model import Employee
from .model import GeofenceEvaluation, GeofenceLocation, GeoPoint


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate distance (in meters) between two GPS coordinates.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


def is_allowed(location: GeofenceLocation, employee: Employee) -> bool:
    return (
        not location.allowed_departments
        or (employee.department_id is not None and employee.department_id in location.allowed_departments)
        or employee.employee_id in location.allowed_employees
    )


def evaluate_geofence(
    employee: Employee,
    locations: Iterable[GeofenceLocation],
    point: GeoPoint,
    *,
    selection: GeofenceSelection = GeofenceSelection.FIRST_MATCH,
) -> GeofenceEvaluation:
    """Decide whether `point` lies inside a location the employee may work at.

    Inactive locations and locations the employee is not allowed at are
    skipped, also as "closest" candidates. A point exactly on the radius is
    inside. FIRST_MATCH stops at the first containing location in iteration
    order; NEAREST_MATCH keeps the closest containing one. When nothing
    contains the point the closest allowed location is reported.
    """
    lat, lon = require_coordinate(point.latitude, point.longitude)

    closest: Optional[GeofenceLocation] = None
    min_distance = math.inf
    match: Optional[GeofenceLocation] = None
    match_distance = math.inf

    for location in locations:
        if not location.is_active or not is_allowed(location, employee):
            continue

        distance = calculate_distance(lat, lon, location.center.latitude, location.center.longitude)

        if distance <= location.radius:
            if selection == GeofenceSelection.FIRST_MATCH:
                return GeofenceEvaluation(is_within_geofence=True, closest_location=location, min_distance=distance)
            if distance < match_distance:
                match, match_distance = location, distance
            continue

        if distance < min_distance:
            closest, min_distance = location, distance

    if match is not None:
        return GeofenceEvaluation(is_within_geofence=True, closest_location=match, min_distance=match_distance)
    return GeofenceEvaluation(is_within_geofence=False, closest_location=closest, min_distance=min_distance)
