from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..courses.model import Course
from ..courses.repository import CourseRepository
from .capabilities import DeviceVerifier
from .rotating_code import ManualCodeIssuer, RotatingCode, RotatingCodeGenerator

STAFF_ROLES = (Role.STAFF, Role.ADMIN)


class SessionCodeService:
    """Codes shown on the staff side of a session."""

    def __init__(
        self,
        courses: CourseRepository,
        *,
        codes: Optional[RotatingCodeGenerator] = None,
        manual: Optional[ManualCodeIssuer] = None,
    ):
        self._courses = courses
        self._codes = codes or RotatingCodeGenerator()
        self._manual = manual or ManualCodeIssuer()

    def _course(self, course_code: str) -> Course:
        course = self._courses.get_by_code((course_code or "").strip().upper())
        if not course:
            raise ValidationError("Course not found")
        return course

    def rotating_code(self, *, current_role: Role, course_code: str, now: Optional[datetime] = None) -> RotatingCode:
        if current_role not in STAFF_ROLES:
            raise AuthorizationError("You do not have permission to view session codes")
        course = self._course(course_code)
        return self._codes.current(course.code, now or now_local())

    def issue_manual_code(self, *, current_role: Role, course_code: str, verifier: DeviceVerifier) -> str:
        if current_role not in STAFF_ROLES:
            raise AuthorizationError("You do not have permission to issue session codes")
        return self._manual.issue(self._course(course_code), verifier)
