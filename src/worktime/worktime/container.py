from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import StatusPolicyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .geofence.mysql_geofence_repository import MySQLGeofenceRepository
from .notifications.notifier import LoggingNotifier, Notifier
from .overtime.mysql_overtime_repository import MySQLOvertimeRepository
from .settings.mysql_settings_repository import MySQLSettingsRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository
    employees_repo: MySQLEmployeeRepository
    settings_repo: MySQLSettingsRepository
    geofence_repo: MySQLGeofenceRepository
    overtime_repo: MySQLOvertimeRepository

    attendance_service: AttendanceService


def build_container(
    *,
    db_config: dict,
    default_timezone: Optional[str] = None,
    notifier: Optional[Notifier] = None,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    settings_repo = MySQLSettingsRepository(conn, default_timezone=default_timezone)
    geofence_repo = MySQLGeofenceRepository(conn)
    overtime_repo = MySQLOvertimeRepository(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        settings_repo,
        geofence_repo,
        overtime_repo,
        notifier=notifier or LoggingNotifier(),
        policy_factory=StatusPolicyFactory(),
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        settings_repo=settings_repo,
        geofence_repo=geofence_repo,
        overtime_repo=overtime_repo,
        attendance_service=attendance_service,
    )
