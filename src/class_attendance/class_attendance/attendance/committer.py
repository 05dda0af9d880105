from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..courses.model import Course
from ..students.model import Student
from .guard import DuplicateMarkGuard
from .model import AttendanceRecord, FlatAttendanceEntry, VerificationLogEntry
from .repository import AttendanceRepository
from .strategies.base import MethodInput, VerificationStrategy

logger = logging.getLogger(__name__)


class AttendanceCommitter:
    """Persist one mark as a log entry plus a flat reporting row, atomically.

    The duplicate check is repeated inside the store transaction; the
    store's uniqueness constraint settles races between devices.
    """

    def __init__(self, attendance: AttendanceRepository, *, guard: Optional[DuplicateMarkGuard] = None):
        self._attendance = attendance
        self._guard = guard or DuplicateMarkGuard()

    def build_entries(
        self,
        *,
        student: Student,
        course: Course,
        strategy: VerificationStrategy,
        supplied: MethodInput,
        now: datetime,
    ) -> tuple[VerificationLogEntry, FlatAttendanceEntry]:
        log = VerificationLogEntry(
            student_id=student.student_id,
            course_id=course.course_id,
            course_code=course.code,
            attend_date=now.date(),
            status=AttendanceStatus.PRESENT,
            method=strategy.method,
            marked_by=strategy.marked_by(supplied),
            timestamp=now,
        )
        flat = FlatAttendanceEntry(
            name=student.full_name,
            attend_date=now.date(),
            course_code=course.code,
            registration_number=student.registration_number,
            department=student.department,
            level=student.level,
            method=strategy.flat_label,
        )
        return log, flat

    def commit(
        self,
        *,
        student: Student,
        course: Course,
        strategy: VerificationStrategy,
        supplied: MethodInput,
        now: datetime,
    ) -> AttendanceRecord:
        log, flat = self.build_entries(student=student, course=course, strategy=strategy, supplied=supplied, now=now)

        with self._attendance.transaction() as tx:
            self._guard.check(
                tx.fetch_today_records(student.student_id, log.attend_date),
                student_id=student.student_id,
                course_code=course.code,
                day=log.attend_date,
            )
            tx.insert_log(log)
            tx.insert_flat_record(flat)

        logger.info(
            "Attendance recorded: student=%s course=%s method=%s", student.student_id, course.code, log.method.value
        )
        return log.to_record()
