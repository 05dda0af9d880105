from __future__ import annotations

from datetime import datetime

from ...core.constants import CODE_DIGITS
from ...core.enums import VerificationMethod
from ...core.exceptions import VerificationFailed
from ...courses.model import Course
from .base import MethodInput, VerificationStrategy


class AdminCodeStrategy(VerificationStrategy):
    """Session code read out by course staff.

    Accepts the last four characters of the course code or the configured
    fallback literal. Both are guessable; kept for compatibility with the
    codes staff currently hand out.
    """

    method = VerificationMethod.ADMIN_CODE
    flat_label = "Admin Code"

    def __init__(self, fallback_code: str):
        self._fallback_code = fallback_code

    def verify(self, *, course: Course, now: datetime, supplied: MethodInput) -> None:
        code = (supplied.passcode or "").strip().upper()
        accepted = {course.code.upper()[-CODE_DIGITS:]}
        if self._fallback_code:
            accepted.add(self._fallback_code.upper())
        if code not in accepted:
            raise VerificationFailed("The session code you entered is incorrect.")
