from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import require_coordinate
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    ConcurrencyConflict,
    ConfigurationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..geofence.model import GeoPoint

logger = logging.getLogger(__name__)


def register(app: Flask, container) -> None:
    service = container.attendance_service

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"success": False, "error": "validation", "message": str(e)}), 400
            except NotFoundError as e:
                return jsonify({"success": False, "error": "not_found", "message": str(e)}), 404
            except ConcurrencyConflict as e:
                return jsonify({"success": False, "error": "conflict", "message": str(e)}), 409
            except ConfigurationError as e:
                logger.error("configuration error on %s: %s", request.path, e)
                return jsonify({"success": False, "error": "configuration", "message": str(e)}), 500
            except DomainError as e:
                return jsonify({"success": False, "error": "domain", "message": str(e)}), 400
            except Exception:
                logger.exception("unhandled error on %s", request.path)
                return jsonify({"success": False, "error": "internal", "message": "Internal server error"}), 500

        return wrapper

    def _body() -> dict:
        return request.get_json(silent=True) or {}

    def _optional_point(data: dict):
        lat, lon = data.get("latitude"), data.get("longitude")
        if lat is None or lon is None:
            return None
        lat, lon = require_coordinate(lat, lon)
        return GeoPoint(latitude=lat, longitude=lon)

    def _optional_datetime(data: dict, key: str):
        value = data.get(key)
        return parse_iso_datetime(value) if value else None

    @app.route("/api/employees/<int:employee_id>/attendance/checkout", methods=["POST"], endpoint="api_checkout")
    @json_errors
    def api_checkout(employee_id: int):
        closure = service.check_out(employee_id, location=_optional_point(_body()))
        return jsonify({"success": True, "message": "Clocked out", "data": closure.to_dict()}), 200

    @app.route(
        "/api/employees/<int:employee_id>/attendance/geolocation-check",
        methods=["POST"],
        endpoint="api_geolocation_check",
    )
    @json_errors
    def api_geolocation_check(employee_id: int):
        point = _optional_point(_body())
        if point is None:
            return jsonify({"success": False, "error": "validation", "message": "Location data required"}), 400

        result = service.check_geolocation(employee_id, point)
        return jsonify({"success": True, **result.to_dict()}), 200

    @app.route(
        "/api/employees/<int:employee_id>/overtime/<int:request_id>/respond",
        methods=["POST"],
        endpoint="api_overtime_respond",
    )
    @json_errors
    def api_overtime_respond(employee_id: int, request_id: int):
        data = _body()
        working = data.get("is_working_overtime")
        if not isinstance(working, bool):
            return jsonify({"success": False, "error": "validation", "message": "is_working_overtime must be true or false"}), 400

        response = service.respond_to_overtime(employee_id, request_id, working)
        message = (
            "Overtime confirmed. Remember to check out when you finish!"
            if working
            else "You have been clocked out successfully."
        )
        return jsonify(
            {
                "success": True,
                "message": message,
                "data": {
                    "request_id": response.request_id,
                    "status": response.status.value,
                    "checkout": response.closure.to_dict() if response.closure else None,
                },
            }
        ), 200

    @app.route("/api/attendance/<int:attendance_id>/overtime", methods=["PATCH"], endpoint="api_overtime_checkout")
    @json_errors
    def api_overtime_checkout(attendance_id: int):
        hours = service.record_overtime_checkout(
            attendance_id, check_out_time=_optional_datetime(_body(), "check_out_time")
        )
        if hours is None:
            return jsonify({"success": True, "message": "No overtime request found"}), 200
        return jsonify(
            {"success": True, "message": f"Overtime of {hours:.2f} hours recorded", "data": {"overtime_hours": hours}}
        ), 200

    @app.route("/api/attendance/<int:attendance_id>/corrections", methods=["POST"], endpoint="api_attendance_correction")
    @json_errors
    def api_attendance_correction(attendance_id: int):
        data = _body()
        status = data.get("status")
        try:
            requested_status = AttendanceStatus(status) if status else None
        except ValueError:
            raise ValidationError(f"Unknown status {status!r}") from None

        record = service.apply_correction(
            attendance_id,
            reason=data.get("reason") or "",
            check_in=_optional_datetime(data, "check_in"),
            check_out=_optional_datetime(data, "check_out"),
            requested_status=requested_status,
        )
        return jsonify(
            {
                "success": True,
                "message": "Correction applied",
                "data": {
                    "attendance_id": record.attendance_id,
                    "check_in_time": record.check_in_time.isoformat(),
                    "check_out_time": record.check_out_time.isoformat() if record.check_out_time else None,
                    "status": record.status.value,
                    "status_reason": record.status_reason,
                    "work_hours": record.work_hours,
                },
            }
        ), 200

    @app.route("/api/breaks/current", methods=["GET"], endpoint="api_current_break")
    @json_errors
    def api_current_break():
        current, upcoming = service.break_status()
        return jsonify(
            {
                "success": True,
                "data": {
                    "is_break": current.is_break,
                    "break_name": current.break_name,
                    "break_end": current.break_end.isoformat() if current.break_end else None,
                    "remaining_minutes": current.remaining_minutes,
                    "upcoming": None
                    if upcoming is None
                    else {
                        "name": upcoming.name,
                        "start_time": upcoming.start_time,
                        "end_time": upcoming.end_time,
                        "starts_in": upcoming.starts_in,
                    },
                },
            }
        ), 200
