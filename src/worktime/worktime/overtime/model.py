from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import OvertimeStatus


@dataclass(frozen=True)
class OvertimeRequest:
    """Prompt sent to an employee still checked in after the scheduled check-out."""

    request_id: int
    employee_id: int
    attendance_id: int
    scheduled_check_out: datetime
    status: OvertimeStatus
    prompt_sent_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    is_working_overtime: Optional[bool] = None
    overtime_hours: Optional[float] = None
    auto_checkout_at: Optional[datetime] = None
    auto_checkout_reason: Optional[str] = None
