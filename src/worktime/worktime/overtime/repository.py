from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import OvertimeStatus
from .model import OvertimeRequest


class OvertimeRepository(Protocol):
    def get_by_id(self, request_id: int) -> Optional[OvertimeRequest]:
        raise NotImplementedError

    def find_for_attendance(self, attendance_id: int, status: OvertimeStatus) -> Optional[OvertimeRequest]:
        raise NotImplementedError

    def record_response(
        self,
        *,
        request_id: int,
        status: OvertimeStatus,
        responded_at: datetime,
        is_working_overtime: bool,
    ) -> bool:
        raise NotImplementedError

    def mark_auto_checkout(self, *, request_id: int, at: datetime, reason: str) -> bool:
        raise NotImplementedError

    def record_overtime_hours(self, *, request_id: int, overtime_hours: float, status: OvertimeStatus) -> bool:
        raise NotImplementedError
