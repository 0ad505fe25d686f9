from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_id_tuple, db_cursor, fetchall
from .model import GeofenceLocation, GeoPoint
from .repository import GeofenceRepository


class MySQLGeofenceRepository(GeofenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[GeofenceLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT location_id, name, latitude, longitude, radius_m, allowed_departments, allowed_employees, is_active
                FROM geofence_locations
                WHERE is_active=1
                ORDER BY location_id
                """
            )
            return [
                GeofenceLocation(
                    location_id=int(r["location_id"]),
                    name=r["name"],
                    center=GeoPoint(latitude=float(r["latitude"]), longitude=float(r["longitude"])),
                    radius=float(r["radius_m"]),
                    allowed_departments=as_id_tuple(r.get("allowed_departments")),
                    allowed_employees=as_id_tuple(r.get("allowed_employees")),
                    is_active=bool(r["is_active"]),
                )
                for r in fetchall(cur)
            ]
