from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from ..core.enums import OvertimeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchone, to_db_datetime
from .model import OvertimeRequest
from .repository import OvertimeRepository

_COLUMNS = """
    request_id, employee_id, attendance_id, scheduled_check_out, status, prompt_sent_at, responded_at,
    is_working_overtime, overtime_hours, auto_checkout_at, auto_checkout_reason
"""


def _to_request(r: Dict[str, Any]) -> OvertimeRequest:
    working = r.get("is_working_overtime")
    return OvertimeRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        attendance_id=int(r["attendance_id"]),
        scheduled_check_out=r["scheduled_check_out"],
        status=OvertimeStatus(r["status"]),
        prompt_sent_at=r.get("prompt_sent_at"),
        responded_at=r.get("responded_at"),
        is_working_overtime=None if working is None else bool(working),
        overtime_hours=as_float(r.get("overtime_hours")),
        auto_checkout_at=r.get("auto_checkout_at"),
        auto_checkout_reason=r.get("auto_checkout_reason"),
    )


class MySQLOvertimeRepository(OvertimeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, request_id: int) -> Optional[OvertimeRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM overtime_requests WHERE request_id=%s", (request_id,))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def find_for_attendance(self, attendance_id: int, status: OvertimeStatus) -> Optional[OvertimeRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM overtime_requests
                WHERE attendance_id=%s AND status=%s
                ORDER BY request_id DESC
                LIMIT 1
                """,
                (attendance_id, status.value),
            )
            r = fetchone(cur)
            return _to_request(r) if r else None

    def record_response(
        self,
        *,
        request_id: int,
        status: OvertimeStatus,
        responded_at: datetime,
        is_working_overtime: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE overtime_requests
                SET status=%s, responded_at=%s, is_working_overtime=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, to_db_datetime(responded_at), int(is_working_overtime), request_id, OvertimeStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def mark_auto_checkout(self, *, request_id: int, at: datetime, reason: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE overtime_requests
                SET status=%s, auto_checkout_at=%s, auto_checkout_reason=%s
                WHERE request_id=%s AND status=%s
                """,
                (OvertimeStatus.AUTO_CHECKOUT.value, to_db_datetime(at), reason, request_id, OvertimeStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def record_overtime_hours(self, *, request_id: int, overtime_hours: float, status: OvertimeStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE overtime_requests SET overtime_hours=%s, status=%s WHERE request_id=%s",
                (overtime_hours, status.value, request_id),
            )
            return cur.rowcount > 0
