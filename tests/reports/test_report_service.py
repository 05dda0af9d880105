from __future__ import annotations

from datetime import date

import pytest

from src.class_attendance.class_attendance.attendance.model import AttendanceReportRow
from src.class_attendance.class_attendance.core.enums import Role
from src.class_attendance.class_attendance.core.exceptions import AuthorizationError, ValidationError
from src.class_attendance.class_attendance.reports.service import AttendanceReportService


class FakeAttendanceRepo:
    def __init__(self, rows):
        self._rows = rows
        self.last_args = None

    def get_report_rows(self, *, start_date: date, end_date: date, course_code=None, student_id=None):
        self.last_args = {
            "start_date": start_date,
            "end_date": end_date,
            "course_code": course_code,
            "student_id": student_id,
        }
        return self._rows


def _row(student_id: str, course_code: str, attended: int, total: int = 40) -> AttendanceReportRow:
    return AttendanceReportRow(
        student_id=student_id,
        full_name=student_id.upper(),
        registration_number=f"REG/{student_id}",
        course_code=course_code,
        course_name=course_code,
        total_sessions=total,
        attended=attended,
    )


def test_report_rates_and_course_summary():
    rows = [_row("a", "CSC412", 30), _row("b", "CSC412", 10), _row("a", "MTH201", 3, total=12)]

    svc = AttendanceReportService(FakeAttendanceRepo(rows))
    report = svc.build_attendance_report(current_role=Role.STAFF, start=date(2024, 1, 1), end=date(2024, 1, 31))

    assert [r["rate_percent"] for r in report.rows] == [75.0, 25.0, 25.0]
    assert report.summary[0] == {"course_code": "CSC412", "course_name": "CSC412", "students": 2, "total_marks": 40}
    assert report.summary[1]["course_code"] == "MTH201"


def test_report_forwards_filters():
    repo = FakeAttendanceRepo([])
    svc = AttendanceReportService(repo)

    svc.build_attendance_report(
        current_role=Role.ADMIN, start=date(2024, 1, 1), end=date(2024, 1, 31), course_code=" csc412 ", student_id="stu-1"
    )

    assert repo.last_args["course_code"] == "CSC412"
    assert repo.last_args["student_id"] == "stu-1"


def test_report_rejects_students_and_inverted_range():
    svc = AttendanceReportService(FakeAttendanceRepo([]))

    with pytest.raises(AuthorizationError):
        svc.build_attendance_report(current_role=Role.STUDENT, start=date(2024, 1, 1), end=date(2024, 1, 31))
    with pytest.raises(ValidationError):
        svc.build_attendance_report(current_role=Role.ADMIN, start=date(2024, 2, 1), end=date(2024, 1, 31))
