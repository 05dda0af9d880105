from datetime import date, datetime

import pytest

from src.class_attendance.class_attendance.attendance.guard import DuplicateMarkGuard
from src.class_attendance.class_attendance.attendance.model import AttendanceRecord
from src.class_attendance.class_attendance.core.enums import VerificationMethod
from src.class_attendance.class_attendance.core.exceptions import AlreadyMarked


def _record(code="CSC412", day=date(2024, 1, 1), student_id="stu-0001") -> AttendanceRecord:
    return AttendanceRecord(
        student_id=student_id,
        course_code=code,
        attend_date=day,
        method=VerificationMethod.PASSCODE,
        timestamp=datetime.combine(day, datetime.min.time()),
    )


def test_same_course_same_day_is_marked():
    guard = DuplicateMarkGuard()

    with pytest.raises(AlreadyMarked):
        guard.check([_record()], student_id="stu-0001", course_code="csc412", day=date(2024, 1, 1))


def test_other_course_or_day_or_student_is_not_marked():
    guard = DuplicateMarkGuard()
    records = [_record(code="CSC401"), _record(day=date(2023, 12, 31)), _record(student_id="stu-0002")]

    assert not guard.is_marked(records, student_id="stu-0001", course_code="CSC412", day=date(2024, 1, 1))
    guard.check(records, student_id="stu-0001", course_code="CSC412", day=date(2024, 1, 1))
