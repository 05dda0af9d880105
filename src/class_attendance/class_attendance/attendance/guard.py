from __future__ import annotations

from datetime import date
from typing import Iterable

from ..core.exceptions import AlreadyMarked
from .model import AttendanceRecord


class DuplicateMarkGuard:
    """At most one mark per (student, course, day). Takes priority over every other check."""

    def is_marked(self, records: Iterable[AttendanceRecord], *, student_id: str, course_code: str, day: date) -> bool:
        code = course_code.upper()
        return any(
            r.student_id == student_id and r.course_code.upper() == code and r.attend_date == day
            for r in records
        )

    def check(self, records: Iterable[AttendanceRecord], *, student_id: str, course_code: str, day: date) -> None:
        if self.is_marked(records, student_id=student_id, course_code=course_code, day=day):
            raise AlreadyMarked()
