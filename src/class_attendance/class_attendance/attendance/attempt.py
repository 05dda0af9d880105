from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttemptState, VerificationMethod
from ..core.exceptions import CheckInError, ValidationError
from ..courses.model import Course
from ..students.model import Student
from .model import AttendanceRecord


@dataclass
class VerificationAttempt:
    """One pass through the check-in flow. Never persisted.

    METHOD_SELECT -> VERIFYING(method) -> SUCCESS | FAILURE. Cancelling while
    verifying goes back to METHOD_SELECT with nothing written.
    """

    student: Student
    course: Course
    opened_at: datetime
    state: AttemptState = AttemptState.METHOD_SELECT
    method: Optional[VerificationMethod] = None
    record: Optional[AttendanceRecord] = None
    failure: Optional[CheckInError] = None

    @property
    def finished(self) -> bool:
        return self.state in (AttemptState.SUCCESS, AttemptState.FAILURE)

    def select(self, method: VerificationMethod) -> None:
        if self.state != AttemptState.METHOD_SELECT:
            raise ValidationError("This check-in attempt is not waiting for a method")
        self.method = method
        self.state = AttemptState.VERIFYING

    def succeed(self, record: AttendanceRecord) -> None:
        self.record = record
        self.state = AttemptState.SUCCESS

    def fail(self, error: Optional[CheckInError] = None) -> None:
        self.failure = error
        self.state = AttemptState.FAILURE

    def cancel(self) -> None:
        self.method = None
        self.state = AttemptState.METHOD_SELECT
