from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .calculator.base import RateCalculator
from .calculator.standard_calculator import StandardRateCalculator


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class AttendanceReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[RateCalculator] = None,
    ):
        self._attendance = attendance
        self._calculator = calculator or StandardRateCalculator()

    def build_attendance_report(
        self,
        *,
        current_role: Role,
        start: date,
        end: date,
        course_code: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> ReportData:
        if current_role not in (Role.ADMIN, Role.STAFF):
            raise AuthorizationError("You do not have permission to view reports")
        if end < start:
            raise ValidationError("End date cannot be before start date")

        query_rows = self._attendance.get_report_rows(
            start_date=start,
            end_date=end,
            course_code=(course_code or "").strip().upper() or None,
            student_id=student_id,
        )

        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for r in query_rows:
            out_rows.append(
                {
                    "student_id": r.student_id,
                    "full_name": r.full_name,
                    "registration_number": r.registration_number,
                    "course_code": r.course_code,
                    "course_name": r.course_name,
                    "attended": r.attended,
                    "total_sessions": r.total_sessions,
                    "rate_percent": self._calculator.rate_percent(r),
                }
            )

            s = summary_map.get(r.course_code)
            if not s:
                s = {
                    "course_code": r.course_code,
                    "course_name": r.course_name,
                    "students": 0,
                    "total_marks": 0,
                }
                summary_map[r.course_code] = s
            s["students"] += 1
            s["total_marks"] += r.attended

        summary = sorted(summary_map.values(), key=lambda x: x["total_marks"], reverse=True)
        return ReportData(rows=out_rows, summary=summary)
