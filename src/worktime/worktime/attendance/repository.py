from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from ..shrinkage.model import ShrinkageResult
from .model import AttendanceClosure, AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open_for_employee(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_open_before(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def close_out(self, closure: AttendanceClosure) -> bool:
        """Write the checkout only if the record has none yet.

        Returns False when another writer closed the record first.
        """

        raise NotImplementedError

    def set_overtime_hours(self, *, attendance_id: int, overtime_hours: float) -> bool:
        raise NotImplementedError

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
        """Admin-only override used after correction approval."""

        raise NotImplementedError
