from __future__ import annotations

from datetime import datetime

from ...core.enums import VerificationMethod
from ...core.exceptions import VerificationFailed
from ...courses.model import Course
from ..rotating_code import RotatingCodeGenerator
from .base import MethodInput, VerificationStrategy


class PasscodeStrategy(VerificationStrategy):
    """Student types the rotating code shown for the course."""

    method = VerificationMethod.PASSCODE
    flat_label = "Passcode"

    def __init__(self, codes: RotatingCodeGenerator):
        self._codes = codes

    def verify(self, *, course: Course, now: datetime, supplied: MethodInput) -> None:
        code = (supplied.passcode or "").strip()
        if not self._codes.accepts(course.code, code, now):
            raise VerificationFailed(
                "The passcode you entered is incorrect. Please check the current code and try again."
            )

    def marked_by(self, supplied: MethodInput) -> str:
        return f"Self (Code: {(supplied.passcode or '').strip()})"
