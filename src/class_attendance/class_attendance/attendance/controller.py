from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import optional_float, require_non_empty
from ..core.enums import FailureKind, Role, VerificationMethod
from ..core.exceptions import AuthorizationError, CheckInError, ValidationError
from ..container import Container
from .capabilities import ReportedBiometric, ReportedDeviceConfirmation, ReportedLocation
from .strategies.base import MethodInput

logger = logging.getLogger(__name__)

_FAILURE_STATUS = {
    FailureKind.ALREADY_MARKED: 409,
    FailureKind.PERMISSION_DENIED: 403,
    FailureKind.NETWORK_ERROR: 503,
}


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session or "role" not in session:
                return jsonify({"success": False, "message": "Please sign in to continue."}), 401
            return view(*args, **kwargs)

        return wrapper

    def _current_role() -> Role:
        try:
            return Role(session.get("role"))
        except ValueError:
            raise AuthorizationError("Unknown role")

    def _failure(e: CheckInError):
        body = {"success": False, "kind": e.kind.value, "message": e.message}
        distance = getattr(e, "distance_meters", None)
        if distance is not None:
            body["distance_meters"] = round(distance)
        return jsonify(body), _FAILURE_STATUS.get(e.kind, 400)

    def _error(e: Exception, status: int):
        return jsonify({"success": False, "message": str(e)}), status

    def _record_json(record) -> dict:
        return {
            "student_id": record.student_id,
            "course_code": record.course_code,
            "date": record.attend_date.strftime("%Y-%m-%d"),
            "method": record.method.value,
            "timestamp": record.timestamp.isoformat(),
        }

    @app.route("/api/courses", methods=["GET"], endpoint="api_courses")
    @login_required
    def api_courses():
        try:
            result = container.checkin_service.courses_for_student(str(session["user_id"]))
        except CheckInError as e:
            return _failure(e)
        except ValidationError as e:
            return _error(e, 404)

        active_code = result.active.code if result.active else None
        return jsonify({
            "success": True,
            "active": active_code,
            "courses": [
                {
                    "code": c.code,
                    "name": c.name,
                    "session_day": c.session_day,
                    "session_time": c.session_time,
                    "duration": c.duration,
                    "geofenced": c.has_location,
                    "marked_today": c.code.upper() in result.marked_codes,
                }
                for c in result.courses
            ],
        }), 200

    @app.route("/api/courses/<code>/code", methods=["GET"], endpoint="api_course_code")
    @login_required
    def api_course_code(code: str):
        try:
            current = container.code_service.rotating_code(current_role=_current_role(), course_code=code)
        except AuthorizationError as e:
            return _error(e, 403)
        except ValidationError as e:
            return _error(e, 404)
        except CheckInError as e:
            return _failure(e)
        return jsonify({"success": True, "code": current.code, "seconds_left": current.seconds_left}), 200

    @app.route("/api/checkin", methods=["POST"], endpoint="api_checkin")
    @login_required
    def api_checkin():
        """Self-service check-in. The device reports prompt outcomes in the body."""
        data = request.get_json(silent=True) or {}
        if data.get("cancelled"):
            # User backed out on the device; nothing was opened, nothing to undo.
            return jsonify({"success": False, "cancelled": True, "message": "Check-in cancelled."}), 200

        try:
            course_code = require_non_empty(str(data.get("course_code") or ""), "Course")
            method = VerificationMethod(str(data.get("method", "")).strip().lower())
            latitude = optional_float(data.get("latitude"), "Latitude")
            longitude = optional_float(data.get("longitude"), "Longitude")
        except ValueError:
            return jsonify({"success": False, "message": "Unknown verification method"}), 400
        except ValidationError as e:
            return _error(e, 400)

        biometric = data.get("biometric_success")
        supplied = MethodInput(
            passcode=str(data.get("code") or "").strip() or None,
            biometric=ReportedBiometric(None if biometric is None else bool(biometric)),
        )

        try:
            record = container.checkin_service.check_in(
                student_id=str(session["user_id"]),
                course_code=course_code,
                method=method,
                supplied=supplied,
                location=ReportedLocation(latitude, longitude),
            )
        except CheckInError as e:
            return _failure(e)
        except ValidationError as e:
            return _error(e, 400)
        except Exception:
            logger.exception("Check-in failed unexpectedly")
            return jsonify({"success": False, "message": "Failed to mark attendance."}), 500

        if record is None:
            return jsonify({"success": False, "cancelled": True, "message": "Check-in cancelled."}), 200
        return jsonify({"success": True, "message": "Attendance marked.", "record": _record_json(record)}), 201

    @app.route("/api/staff/checkin", methods=["POST"], endpoint="api_staff_checkin")
    @login_required
    def api_staff_checkin():
        data = request.get_json(silent=True) or {}
        try:
            record = container.checkin_service.staff_mark(
                current_role=_current_role(),
                student_id=require_non_empty(str(data.get("student_id") or ""), "Student"),
                course_code=require_non_empty(str(data.get("course_code") or ""), "Course"),
                face_match=bool(data.get("face_match")),
            )
        except AuthorizationError as e:
            return _error(e, 403)
        except CheckInError as e:
            return _failure(e)
        except ValidationError as e:
            return _error(e, 400)
        except Exception:
            logger.exception("Staff marking failed unexpectedly")
            return jsonify({"success": False, "message": "Failed to mark attendance."}), 500

        return jsonify({"success": True, "message": "Attendance marked.", "record": _record_json(record)}), 201

    @app.route("/api/staff/manual-code", methods=["POST"], endpoint="api_manual_code")
    @login_required
    def api_manual_code():
        data = request.get_json(silent=True) or {}
        try:
            code = container.code_service.issue_manual_code(
                current_role=_current_role(),
                course_code=require_non_empty(str(data.get("course_code") or ""), "Course"),
                verifier=ReportedDeviceConfirmation(bool(data.get("device_verified"))),
            )
        except AuthorizationError as e:
            return _error(e, 403)
        except CheckInError as e:
            return _failure(e)
        except ValidationError as e:
            return _error(e, 400)
        return jsonify({"success": True, "code": code}), 200

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_log")
    @login_required
    def api_attendance_log():
        try:
            day = parse_iso_date(request.args.get("date") or now_local().strftime("%Y-%m-%d"))
        except ValueError:
            return jsonify({"success": False, "message": "Date must be YYYY-MM-DD"}), 400

        try:
            rows = container.log_service.list_for_date(
                current_role=_current_role(),
                day=day,
                course_code=request.args.get("course_code"),
            )
        except AuthorizationError as e:
            return _error(e, 403)
        except CheckInError as e:
            return _failure(e)
        return jsonify({"success": True, "date": day.strftime("%Y-%m-%d"), "count": len(rows), "records": rows}), 200

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="api_attendance_report")
    @login_required
    def api_attendance_report():
        today = now_local().date()
        try:
            start = parse_iso_date(request.args.get("start") or today.replace(day=1).strftime("%Y-%m-%d"))
            end = parse_iso_date(request.args.get("end") or today.strftime("%Y-%m-%d"))
        except ValueError:
            return jsonify({"success": False, "message": "Date must be YYYY-MM-DD"}), 400

        try:
            data = container.report_service.build_attendance_report(
                current_role=_current_role(),
                start=start,
                end=end,
                course_code=request.args.get("course_code"),
                student_id=request.args.get("student_id") or None,
            )
        except AuthorizationError as e:
            return _error(e, 403)
        except CheckInError as e:
            return _failure(e)
        except ValidationError as e:
            return _error(e, 400)

        return jsonify({
            "success": True,
            "start": start.strftime("%Y-%m-%d"),
            "end": end.strftime("%Y-%m-%d"),
            "generated_at": now_local().isoformat(timespec="seconds"),
            "rows": data.rows,
            "summary": data.summary,
        }), 200
