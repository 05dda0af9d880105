import pytest

from src.class_attendance.class_attendance.attendance.committer import AttendanceCommitter
from src.class_attendance.class_attendance.attendance.strategies.base import MethodInput
from src.class_attendance.class_attendance.attendance.strategies.biometric_strategy import BiometricStrategy
from src.class_attendance.class_attendance.core.enums import Role, VerificationMethod
from src.class_attendance.class_attendance.core.exceptions import AlreadyMarked, NetworkError


def test_commit_writes_both_rows(attendance, student, course, fixed_now):
    record = AttendanceCommitter(attendance).commit(
        student=student, course=course, strategy=BiometricStrategy(), supplied=MethodInput(), now=fixed_now
    )

    assert record.method == VerificationMethod.BIOMETRIC
    assert record.timestamp == fixed_now
    assert len(attendance.logs) == 1
    assert attendance.flat[0].name == "Ada Obi"
    assert attendance.flat[0].department == "Computer Science"
    assert attendance.flat[0].level == "400"


def test_failed_second_write_leaves_nothing(attendance, student, course, fixed_now):
    attendance.fail_flat_insert = True

    with pytest.raises(NetworkError):
        AttendanceCommitter(attendance).commit(
            student=student, course=course, strategy=BiometricStrategy(), supplied=MethodInput(), now=fixed_now
        )

    assert attendance.logs == []
    assert attendance.flat == []


def test_stale_snapshot_caught_inside_transaction(service, attendance, student, course, fixed_now):
    attendance.add_existing(student=student, course=course, at=fixed_now)
    attendance.stale_reads = True

    with pytest.raises(AlreadyMarked):
        service.staff_mark(
            current_role=Role.STAFF, student_id=student.student_id, course_code=course.code, face_match=True, now=fixed_now
        )

    assert len(attendance.logs) == 1
    assert attendance.flat == []
