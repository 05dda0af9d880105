import pytest

from src.class_attendance.class_attendance.attendance.attempt import VerificationAttempt
from src.class_attendance.class_attendance.core.enums import AttemptState, VerificationMethod
from src.class_attendance.class_attendance.core.exceptions import ValidationError, VerificationFailed


def test_cancel_returns_to_method_select(student, course, fixed_now):
    attempt = VerificationAttempt(student=student, course=course, opened_at=fixed_now)

    attempt.select(VerificationMethod.BIOMETRIC)
    assert attempt.state == AttemptState.VERIFYING

    attempt.cancel()
    assert attempt.state == AttemptState.METHOD_SELECT
    assert attempt.method is None
    assert not attempt.finished


def test_failure_is_terminal(student, course, fixed_now):
    attempt = VerificationAttempt(student=student, course=course, opened_at=fixed_now)
    attempt.select(VerificationMethod.PASSCODE)
    attempt.fail(VerificationFailed("nope"))

    assert attempt.finished
    with pytest.raises(ValidationError):
        attempt.select(VerificationMethod.BIOMETRIC)
