from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus, CheckoutKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, to_db_datetime
from ..geofence.model import GeoPoint
from ..shrinkage.model import ShrinkageResult
from .model import AttendanceClosure, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date, check_in_time, check_out_time, status, status_reason,
    checkout_kind, work_hours, total_logged_hours, break_minutes, shrinkage_percentage,
    overtime_hours, check_out_latitude, check_out_longitude, remarks
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    location = None
    if r.get("check_out_latitude") is not None and r.get("check_out_longitude") is not None:
        location = GeoPoint(latitude=float(r["check_out_latitude"]), longitude=float(r["check_out_longitude"]))

    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        status_reason=r.get("status_reason"),
        checkout_kind=CheckoutKind(r["checkout_kind"]) if r.get("checkout_kind") else None,
        work_hours=as_float(r.get("work_hours")),
        total_logged_hours=as_float(r.get("total_logged_hours")),
        break_minutes=r.get("break_minutes"),
        shrinkage_percentage=as_float(r.get("shrinkage_percentage")),
        overtime_hours=as_float(r.get("overtime_hours")),
        check_out_location=location,
        remarks=r.get("remarks"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (attendance_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_open_for_employee(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s AND check_out_time IS NULL
                """,
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_open_before(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE work_date < %s AND check_out_time IS NULL
                ORDER BY work_date, attendance_id
                """,
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def close_out(self, closure: AttendanceClosure) -> bool:
        s = closure.shrinkage
        loc = closure.check_out_location
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, checkout_kind=%s, status=%s, status_reason=%s,
                    work_hours=%s, total_logged_hours=%s, break_minutes=%s, shrinkage_percentage=%s,
                    overtime_hours=COALESCE(%s, overtime_hours),
                    check_out_latitude=%s, check_out_longitude=%s, remarks=COALESCE(%s, remarks)
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (
                    to_db_datetime(closure.check_out_time),
                    closure.checkout_kind.value,
                    closure.status.value,
                    closure.status_reason,
                    s.effective_work_hours,
                    s.total_logged_hours,
                    s.break_minutes,
                    s.shrinkage_percentage,
                    closure.overtime_hours,
                    loc.latitude if loc else None,
                    loc.longitude if loc else None,
                    closure.remarks,
                    closure.attendance_id,
                ),
            )
            return cur.rowcount > 0

    def set_overtime_hours(self, *, attendance_id: int, overtime_hours: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET overtime_hours=%s WHERE attendance_id=%s",
                (overtime_hours, attendance_id),
            )
            return cur.rowcount > 0

    def apply_correction(
        self,
        *,
        attendance_id: int,
        check_in_time: datetime,
        check_out_time: Optional[datetime],
        status: AttendanceStatus,
        status_reason: Optional[str],
        shrinkage: Optional[ShrinkageResult],
        remarks: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, check_out_time=%s, status=%s, status_reason=%s, remarks=%s,
                    work_hours=COALESCE(%s, work_hours),
                    total_logged_hours=COALESCE(%s, total_logged_hours),
                    break_minutes=COALESCE(%s, break_minutes),
                    shrinkage_percentage=COALESCE(%s, shrinkage_percentage)
                WHERE attendance_id=%s
                """,
                (
                    to_db_datetime(check_in_time),
                    to_db_datetime(check_out_time),
                    status.value,
                    status_reason,
                    remarks,
                    shrinkage.effective_work_hours if shrinkage else None,
                    shrinkage.total_logged_hours if shrinkage else None,
                    shrinkage.break_minutes if shrinkage else None,
                    shrinkage.shrinkage_percentage if shrinkage else None,
                    attendance_id,
                ),
            )
            return cur.rowcount > 0
