from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, CheckoutKind
from ..geofence.model import GeoPoint
from ..shrinkage.model import ShrinkageResult


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one work date."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    status_reason: Optional[str] = None
    checkout_kind: Optional[CheckoutKind] = None
    work_hours: Optional[float] = None
    total_logged_hours: Optional[float] = None
    break_minutes: Optional[int] = None
    shrinkage_percentage: Optional[float] = None
    overtime_hours: Optional[float] = None
    check_out_location: Optional[GeoPoint] = None
    remarks: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None


@dataclass(frozen=True)
class AttendanceClosure:
    """Everything written onto a record when it is checked out."""

    attendance_id: int
    check_out_time: datetime
    checkout_kind: CheckoutKind
    status: AttendanceStatus
    status_reason: str
    shrinkage: ShrinkageResult
    check_out_location: Optional[GeoPoint] = None
    overtime_hours: Optional[float] = None
    remarks: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "check_out_time": self.check_out_time.isoformat(),
            "checkout_kind": self.checkout_kind.value,
            "status": self.status.value,
            "status_reason": self.status_reason,
            "work_hours": self.shrinkage.effective_work_hours,
            "overtime_hours": self.overtime_hours,
            **{k: v for k, v in self.shrinkage.to_dict().items() if k != "effective_work_hours"},
        }
