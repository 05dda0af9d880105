from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import Role, VerificationMethod
from ..core.exceptions import (
    AttemptCancelled,
    AuthorizationError,
    CheckInError,
    ScheduleClosed,
    ValidationError,
)
from ..courses.model import Course
from ..courses.repository import CourseRepository
from ..students.model import Student
from ..students.repository import StudentRepository
from .attempt import VerificationAttempt
from .capabilities import LocationProvider
from .committer import AttendanceCommitter
from .factory import VerificationStrategyFactory
from .geofence import GeofenceValidator
from .guard import DuplicateMarkGuard
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .schedule_window import ScheduleWindowEvaluator, pick_active_course
from .strategies.base import MethodInput, VerificationStrategy

logger = logging.getLogger(__name__)

SELF_SERVICE_METHODS = (VerificationMethod.BIOMETRIC, VerificationMethod.PASSCODE, VerificationMethod.ADMIN_CODE)


@dataclass(frozen=True)
class StudentCourses:
    courses: Sequence[Course]
    active: Optional[Course]
    marked_codes: frozenset[str]


class CheckInService:
    """Runs a check-in attempt through its checks in a fixed order.

    Self-service: duplicate guard, schedule window, the method's own check,
    geofence, commit. Staff marking skips the schedule window and geofence.
    The first refusal ends the attempt; nothing is written unless every
    check passed.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        courses: CourseRepository,
        *,
        strategy_factory: Optional[VerificationStrategyFactory] = None,
        schedule: Optional[ScheduleWindowEvaluator] = None,
        geofence: Optional[GeofenceValidator] = None,
        guard: Optional[DuplicateMarkGuard] = None,
        committer: Optional[AttendanceCommitter] = None,
    ):
        self._attendance = attendance
        self._students = students
        self._courses = courses
        self._factory = strategy_factory or VerificationStrategyFactory()
        self._schedule = schedule or ScheduleWindowEvaluator()
        self._geofence = geofence or GeofenceValidator()
        self._guard = guard or DuplicateMarkGuard()
        self._committer = committer or AttendanceCommitter(attendance, guard=self._guard)

    def _load(self, student_id: str, course_code: str) -> tuple[Student, Course]:
        student = self._students.get_by_id(student_id)
        if not student:
            raise ValidationError("Student profile not found")
        course = self._courses.get_by_code((course_code or "").strip().upper())
        if not course:
            raise ValidationError("No course selected.")
        return student, course

    def _ensure_not_marked(self, student: Student, course: Course, now: datetime) -> None:
        records = self._attendance.fetch_today_records(student.student_id, now.date())
        self._guard.check(records, student_id=student.student_id, course_code=course.code, day=now.date())

    def courses_for_student(self, student_id: str, *, now: Optional[datetime] = None) -> StudentCourses:
        now = now or now_local()
        student = self._students.get_by_id(student_id)
        if not student:
            raise ValidationError("Student profile not found")

        courses = self._courses.list_for_student(department_id=student.department_id, level_id=student.level_id)
        records = self._attendance.fetch_today_records(student.student_id, now.date())
        return StudentCourses(
            courses=courses,
            active=pick_active_course(courses, now, self._schedule),
            marked_codes=frozenset(r.course_code.upper() for r in records),
        )

    def open_attempt(self, *, student_id: str, course_code: str, now: Optional[datetime] = None) -> VerificationAttempt:
        """Start a check-in; refuses up front if today's mark already exists."""
        now = now or now_local()
        student, course = self._load(student_id, course_code)
        self._ensure_not_marked(student, course, now)
        logger.debug("Check-in attempt opened: student=%s course=%s", student.student_id, course.code)
        return VerificationAttempt(student=student, course=course, opened_at=now)

    def submit(
        self,
        attempt: VerificationAttempt,
        method: VerificationMethod,
        *,
        supplied: Optional[MethodInput] = None,
        location: Optional[LocationProvider] = None,
        now: Optional[datetime] = None,
    ) -> Optional[AttendanceRecord]:
        """Verify with ``method`` and commit.

        Returns the new record, or None when the user cancelled (the attempt
        is back at method selection). Refusals raise CheckInError.
        """
        if method not in SELF_SERVICE_METHODS:
            raise ValidationError("This verification method is only available to course staff")
        return self._run(attempt, method, supplied or MethodInput(), location, now or now_local(), self_service=True)

    def check_in(
        self,
        *,
        student_id: str,
        course_code: str,
        method: VerificationMethod,
        supplied: Optional[MethodInput] = None,
        location: Optional[LocationProvider] = None,
        now: Optional[datetime] = None,
    ) -> Optional[AttendanceRecord]:
        now = now or now_local()
        attempt = self.open_attempt(student_id=student_id, course_code=course_code, now=now)
        return self.submit(attempt, method, supplied=supplied, location=location, now=now)

    def staff_mark(
        self,
        *,
        current_role: Role,
        student_id: str,
        course_code: str,
        face_match: bool,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        if current_role not in (Role.STAFF, Role.ADMIN):
            raise AuthorizationError("Only course staff can mark attendance for a student")

        now = now or now_local()
        attempt = self.open_attempt(student_id=student_id, course_code=course_code, now=now)
        return self._run(attempt, VerificationMethod.FACE_MATCH, MethodInput(face_match=face_match), None, now, self_service=False)

    def _run(
        self,
        attempt: VerificationAttempt,
        method: VerificationMethod,
        supplied: MethodInput,
        location: Optional[LocationProvider],
        now: datetime,
        *,
        self_service: bool,
    ) -> Optional[AttendanceRecord]:
        strategy = self._factory.for_method(method)
        attempt.select(method)
        logger.debug(
            "Method selected: student=%s course=%s method=%s",
            attempt.student.student_id,
            attempt.course.code,
            method.value,
        )
        try:
            self._verify(attempt, strategy, supplied, location, now, self_service=self_service)
            record = self._committer.commit(
                student=attempt.student,
                course=attempt.course,
                strategy=strategy,
                supplied=supplied,
                now=now,
            )
        except AttemptCancelled:
            attempt.cancel()
            logger.info("Check-in cancelled: student=%s course=%s", attempt.student.student_id, attempt.course.code)
            return None
        except CheckInError as e:
            attempt.fail(e)
            logger.info(
                "Check-in refused: student=%s course=%s method=%s kind=%s",
                attempt.student.student_id,
                attempt.course.code,
                method.value,
                e.kind.value,
            )
            raise
        except Exception:
            attempt.fail()
            logger.warning(
                "Check-in aborted: student=%s course=%s method=%s",
                attempt.student.student_id,
                attempt.course.code,
                method.value,
            )
            raise

        attempt.succeed(record)
        return record

    def _verify(
        self,
        attempt: VerificationAttempt,
        strategy: VerificationStrategy,
        supplied: MethodInput,
        location: Optional[LocationProvider],
        now: datetime,
        *,
        self_service: bool,
    ) -> None:
        self._ensure_not_marked(attempt.student, attempt.course, now)

        if self_service:
            window = self._schedule.evaluate(attempt.course, now)
            if not window.valid:
                raise ScheduleClosed(window.reason or "Attendance is closed for this course.")

        strategy.verify(course=attempt.course, now=now, supplied=supplied)

        if self_service and strategy.requires_geofence:
            self._geofence.check(attempt.course, location)
