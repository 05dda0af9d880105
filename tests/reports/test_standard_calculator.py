from src.class_attendance.class_attendance.attendance.model import AttendanceReportRow
from src.class_attendance.class_attendance.reports.calculator.standard_calculator import StandardRateCalculator


def _row(attended: int, total: int) -> AttendanceReportRow:
    return AttendanceReportRow(
        student_id="stu-0001",
        full_name="A",
        registration_number="CSC/2021/001",
        course_code="CSC412",
        course_name="Software Engineering",
        total_sessions=total,
        attended=attended,
    )


def test_rate_is_rounded_percentage():
    assert StandardRateCalculator().rate_percent(_row(1, 3)) == 33.3


def test_rate_is_capped_at_one_hundred():
    assert StandardRateCalculator().rate_percent(_row(45, 40)) == 100.0


def test_missing_total_uses_default_forty():
    assert StandardRateCalculator().rate_percent(_row(10, 0)) == 25.0
