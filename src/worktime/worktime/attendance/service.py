from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import at_wall_clock, now_local, to_local, to_utc
from ..common.validators import require_coordinate, require_non_empty
from ..core.constants import (
    AUTO_CORRECTED_REMARK,
    AUTO_CORRECTED_SUFFIX,
    CORRECTION_PREFIX,
    GEOFENCE_EXIT_OVERTIME_REASON,
    GEOFENCE_EXIT_SUFFIX,
)
from ..core.enums import AttendanceStatus, CheckoutKind, OvertimeStatus
from ..core.exceptions import ConcurrencyConflict, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..geofence.evaluator import evaluate_geofence
from ..geofence.model import GeoPoint
from ..geofence.repository import GeofenceRepository
from ..notifications.notifier import LoggingNotifier, Notifier
from ..overtime.calculator import calculate_overtime_hours
from ..overtime.repository import OvertimeRepository
from ..settings.model import CompanySettings
from ..settings.repository import SettingsRepository
from ..shrinkage.breaks import get_upcoming_break, is_break_time
from ..shrinkage.calculator import calculate_effective_work_hours
from ..shrinkage.model import BreakWindowStatus, ShrinkageResult, UpcomingBreak
from .factory import StatusPolicyFactory
from .model import AttendanceClosure, AttendanceRecord
from .repository import AttendanceRepository
from .strategies.base import AttendanceStatusResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeolocationCheckResult:
    is_checked_in: bool
    within_geofence: bool
    message: str
    auto_checkout: bool = False
    location_name: Optional[str] = None
    distance: Optional[int] = None
    closure: Optional[AttendanceClosure] = None

    def to_dict(self) -> dict:
        data = {
            "is_checked_in": self.is_checked_in,
            "within_geofence": self.within_geofence,
            "message": self.message,
            "auto_checkout": self.auto_checkout,
            "location": self.location_name,
            "distance": self.distance,
        }
        if self.closure:
            data["checkout"] = self.closure.to_dict()
        return data


@dataclass(frozen=True)
class OvertimeResponse:
    request_id: int
    status: OvertimeStatus
    closure: Optional[AttendanceClosure] = None


class AttendanceService:
    """Closes attendance records.

    Manual, overtime, auto-geofence and auto-corrected checkouts all go
    through `_close`, so they compute work hours and status the same way.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        settings: SettingsRepository,
        geofences: GeofenceRepository,
        overtime: OvertimeRepository,
        *,
        notifier: Optional[Notifier] = None,
        policy_factory: Optional[StatusPolicyFactory] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._settings = settings
        self._geofences = geofences
        self._overtime = overtime
        self._notifier = notifier or LoggingNotifier()
        self._policies = policy_factory or StatusPolicyFactory()

    def _load_settings(self) -> CompanySettings:
        return self._settings.get_company_settings().validate()

    @staticmethod
    def _resolve_now(now: Optional[datetime], settings: CompanySettings) -> datetime:
        return to_local(now, settings.tz) if now else now_local(settings.tz)

    def _require_employee(self, employee_id: int):
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def compute(
        self, check_in: datetime, check_out: datetime, settings: CompanySettings
    ) -> tuple[ShrinkageResult, AttendanceStatusResult]:
        shrinkage = calculate_effective_work_hours(
            check_in,
            check_out,
            settings.break_timings,
            buffer_per_break=settings.transition_buffer_minutes,
            buffer_policy=settings.buffer_policy,
            tz=settings.tz,
        )
        verdict = self._policies.for_settings(settings).decide(
            shrinkage.effective_work_hours,
            full_day_hours=settings.full_day_hours,
            half_day_hours=settings.half_day_hours,
        )
        return shrinkage, verdict

    def _close(
        self,
        record: AttendanceRecord,
        *,
        check_out: datetime,
        kind: CheckoutKind,
        settings: CompanySettings,
        reason_suffix: str = "",
        location: Optional[GeoPoint] = None,
        overtime_hours: Optional[float] = None,
        remarks: Optional[str] = None,
    ) -> AttendanceClosure:
        shrinkage, verdict = self.compute(record.check_in_time, check_out, settings)
        closure = AttendanceClosure(
            attendance_id=record.attendance_id,
            check_out_time=check_out,
            checkout_kind=kind,
            status=verdict.status,
            status_reason=verdict.reason + reason_suffix,
            shrinkage=shrinkage,
            check_out_location=location,
            overtime_hours=overtime_hours,
            remarks=remarks,
        )
        if not self._attendance.close_out(closure):
            raise ConcurrencyConflict(f"Attendance {record.attendance_id} was already checked out")

        logger.info(
            "attendance=%s employee=%s closed kind=%s status=%s work_hours=%s shrinkage=%s%%",
            record.attendance_id,
            record.employee_id,
            kind.value,
            verdict.status.value,
            shrinkage.effective_work_hours,
            shrinkage.shrinkage_percentage,
        )
        return closure

    def _notify(self, employee_id: int, **message) -> None:
        try:
            self._notifier.notify(employee_id, **message)
        except Exception:
            logger.exception("Failed to notify employee=%s", employee_id)

    def check_out(
        self,
        employee_id: int,
        *,
        now: Optional[datetime] = None,
        location: Optional[GeoPoint] = None,
    ) -> AttendanceClosure:
        settings = self._load_settings()
        now = self._resolve_now(now, settings)

        record = self._attendance.get_open_for_employee(employee_id, now.date())
        if not record:
            raise ValidationError("No open attendance record for today")

        confirmed = self._overtime.find_for_attendance(record.attendance_id, OvertimeStatus.CONFIRMED)
        if not confirmed:
            return self._close(record, check_out=now, kind=CheckoutKind.MANUAL, settings=settings, location=location)

        overtime_hours = calculate_overtime_hours(now, confirmed.scheduled_check_out, tz=settings.tz)
        closure = self._close(
            record,
            check_out=now,
            kind=CheckoutKind.OVERTIME,
            settings=settings,
            location=location,
            overtime_hours=overtime_hours,
        )
        self._overtime.record_overtime_hours(
            request_id=confirmed.request_id,
            overtime_hours=overtime_hours,
            status=OvertimeStatus.MANUAL_CHECKOUT,
        )
        return closure

    def check_geolocation(
        self,
        employee_id: int,
        point: GeoPoint,
        *,
        now: Optional[datetime] = None,
    ) -> GeolocationCheckResult:
        """Auto check-out an employee found outside every allowed geofence."""
        require_coordinate(point.latitude, point.longitude)
        settings = self._load_settings()
        now = self._resolve_now(now, settings)
        employee = self._require_employee(employee_id)

        record = self._attendance.get_open_for_employee(employee_id, now.date())
        if not record:
            return GeolocationCheckResult(
                is_checked_in=False, within_geofence=False, message="Not checked in or already checked out"
            )

        if not settings.geofence_enabled:
            return GeolocationCheckResult(is_checked_in=True, within_geofence=True, message="Geofence not enabled")

        locations = self._geofences.list_active()
        if not locations:
            return GeolocationCheckResult(
                is_checked_in=True, within_geofence=True, message="No geofence locations configured"
            )

        evaluation = evaluate_geofence(employee, locations, point, selection=settings.geofence_selection)
        location_name = evaluation.closest_location.name if evaluation.closest_location else None

        if evaluation.is_within_geofence:
            return GeolocationCheckResult(
                is_checked_in=True,
                within_geofence=True,
                message="User is within office geofence",
                location_name=location_name,
            )

        closure = self._close(
            record,
            check_out=now,
            kind=CheckoutKind.AUTO_GEOFENCE,
            settings=settings,
            reason_suffix=GEOFENCE_EXIT_SUFFIX,
            location=point,
        )

        pending = self._overtime.find_for_attendance(record.attendance_id, OvertimeStatus.PENDING)
        if pending:
            self._overtime.mark_auto_checkout(request_id=pending.request_id, at=now, reason=GEOFENCE_EXIT_OVERTIME_REASON)

        self._notify(
            employee_id,
            title="Auto Clock-Out: Left Office",
            body=(
                "You've been automatically clocked out as you left the office area. "
                f"Work hours: {closure.shrinkage.effective_work_hours}h"
            ),
            data={
                "type": "geofence-auto-checkout",
                "checkout_time": now.isoformat(),
                "work_hours": closure.shrinkage.effective_work_hours,
                "status": closure.status.value,
            },
        )

        distance = round(evaluation.min_distance) if evaluation.closest_location else None
        return GeolocationCheckResult(
            is_checked_in=False,
            within_geofence=False,
            message="Auto clocked out - user left office geofence",
            auto_checkout=True,
            location_name=location_name,
            distance=distance,
            closure=closure,
        )

    def respond_to_overtime(
        self,
        employee_id: int,
        request_id: int,
        is_working_overtime: bool,
        *,
        now: Optional[datetime] = None,
    ) -> OvertimeResponse:
        settings = self._load_settings()
        now = self._resolve_now(now, settings)

        req = self._overtime.get_by_id(request_id)
        if not req or req.employee_id != employee_id or req.status != OvertimeStatus.PENDING:
            raise NotFoundError("Overtime request not found or already processed")

        if is_working_overtime:
            self._overtime.record_response(
                request_id=req.request_id,
                status=OvertimeStatus.CONFIRMED,
                responded_at=now,
                is_working_overtime=True,
            )
            return OvertimeResponse(request_id=req.request_id, status=OvertimeStatus.CONFIRMED)

        closure = None
        record = self._attendance.get_by_id(req.attendance_id)
        if record and record.is_open:
            closure = self._close(record, check_out=now, kind=CheckoutKind.MANUAL, settings=settings)

        self._overtime.record_response(
            request_id=req.request_id,
            status=OvertimeStatus.MANUAL_CHECKOUT,
            responded_at=now,
            is_working_overtime=False,
        )
        return OvertimeResponse(request_id=req.request_id, status=OvertimeStatus.MANUAL_CHECKOUT, closure=closure)

    def record_overtime_checkout(
        self,
        attendance_id: int,
        *,
        check_out_time: Optional[datetime] = None,
    ) -> Optional[float]:
        """Store overtime hours for a confirmed request; None when there is none."""
        settings = self._load_settings()
        req = self._overtime.find_for_attendance(attendance_id, OvertimeStatus.CONFIRMED)
        if not req:
            return None

        check_out = self._resolve_now(check_out_time, settings)
        overtime_hours = calculate_overtime_hours(check_out, req.scheduled_check_out, tz=settings.tz)

        self._overtime.record_overtime_hours(
            request_id=req.request_id,
            overtime_hours=overtime_hours,
            status=OvertimeStatus.MANUAL_CHECKOUT,
        )
        self._attendance.set_overtime_hours(attendance_id=attendance_id, overtime_hours=overtime_hours)
        logger.info("attendance=%s overtime recorded hours=%s", attendance_id, overtime_hours)
        return overtime_hours

    def close_stale_records(self, *, now: Optional[datetime] = None) -> list[AttendanceClosure]:
        """Close records left open on past days at the scheduled check-out time."""
        settings = self._load_settings()
        now = self._resolve_now(now, settings)
        scheduled_clock = settings.scheduled_check_out()

        closures: list[AttendanceClosure] = []
        for record in self._attendance.list_open_before(now.date()):
            check_in = to_local(record.check_in_time, settings.tz)
            scheduled = at_wall_clock(record.work_date, scheduled_clock, settings.tz)
            try:
                closures.append(
                    self._close(
                        record,
                        check_out=max(check_in, scheduled, key=to_utc),
                        kind=CheckoutKind.AUTO_CORRECTED,
                        settings=settings,
                        reason_suffix=AUTO_CORRECTED_SUFFIX,
                        remarks=(record.remarks or "") + AUTO_CORRECTED_REMARK,
                    )
                )
            except (ConcurrencyConflict, ValidationError) as e:
                logger.warning("attendance=%s not auto-corrected: %s", record.attendance_id, e)

        logger.info("auto-corrected %s stale attendance records", len(closures))
        return closures

    def apply_correction(
        self,
        attendance_id: int,
        *,
        reason: str,
        check_in: Optional[datetime] = None,
        check_out: Optional[datetime] = None,
        requested_status: Optional[AttendanceStatus] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        reason = require_non_empty(reason, "reason")
        settings = self._load_settings()
        now = self._resolve_now(now, settings)

        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")

        new_in = to_local(check_in or record.check_in_time, settings.tz)
        new_out = check_out or record.check_out_time
        if new_out is not None:
            new_out = to_local(new_out, settings.tz)

        shrinkage = None
        status = requested_status or record.status
        status_reason = record.status_reason
        if new_out is not None:
            shrinkage, verdict = self.compute(new_in, new_out, settings)
            status = requested_status or verdict.status
            status_reason = CORRECTION_PREFIX + verdict.reason

        remarks = f"Corrected on {now.date().isoformat()} - {reason}"
        self._attendance.apply_correction(
            attendance_id=attendance_id,
            check_in_time=new_in,
            check_out_time=new_out,
            status=status,
            status_reason=status_reason,
            shrinkage=shrinkage,
            remarks=remarks,
        )

        updated = replace(
            record,
            check_in_time=new_in,
            check_out_time=new_out,
            status=status,
            status_reason=status_reason,
            remarks=remarks,
        )
        if shrinkage:
            updated = replace(
                updated,
                work_hours=shrinkage.effective_work_hours,
                total_logged_hours=shrinkage.total_logged_hours,
                break_minutes=shrinkage.break_minutes,
                shrinkage_percentage=shrinkage.shrinkage_percentage,
            )
        return updated

    def break_status(self, *, now: Optional[datetime] = None) -> tuple[BreakWindowStatus, Optional[UpcomingBreak]]:
        settings = self._load_settings()
        now = self._resolve_now(now, settings)
        return (
            is_break_time(settings.break_timings, now, tz=settings.tz),
            get_upcoming_break(settings.break_timings, now, tz=settings.tz),
        )
