from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

import pytest

from src.class_attendance.class_attendance.attendance.model import (
    AttendanceRecord,
    AttendanceReportRow,
    FlatAttendanceEntry,
    VerificationLogEntry,
)
from src.class_attendance.class_attendance.attendance.service import CheckInService
from src.class_attendance.class_attendance.core.enums import AttendanceStatus, VerificationMethod
from src.class_attendance.class_attendance.core.exceptions import AlreadyMarked, NetworkError
from src.class_attendance.class_attendance.courses.model import Course
from src.class_attendance.class_attendance.students.model import Student

CLASSROOM = (6.5243793, 3.3792057)


@dataclass
class InMemoryStudents:
    students_by_id: dict[str, Student]

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self.students_by_id.get(student_id)


@dataclass
class InMemoryCourses:
    courses: list[Course]

    def get_by_code(self, code: str) -> Optional[Course]:
        for c in self.courses:
            if c.code == code.upper():
                return c
        return None

    def list_for_student(self, *, department_id, level_id):
        return [c for c in self.courses if c.department_id == department_id and c.level_id == level_id]


class _Writer:
    def __init__(self, store: "InMemoryAttendance"):
        self._store = store
        self.logs: list[VerificationLogEntry] = []
        self.flat: list[FlatAttendanceEntry] = []

    def fetch_today_records(self, student_id: str, day: date):
        return self._store.committed_records(student_id, day) + [
            e.to_record() for e in self.logs if e.student_id == student_id and e.attend_date == day
        ]

    def insert_log(self, entry: VerificationLogEntry) -> None:
        key = (entry.student_id, entry.course_code.upper(), entry.attend_date)
        existing = {(e.student_id, e.course_code.upper(), e.attend_date) for e in self._store.logs + self.logs}
        if key in existing:
            raise AlreadyMarked()
        self.logs.append(entry)

    def insert_flat_record(self, entry: FlatAttendanceEntry) -> None:
        if self._store.fail_flat_insert:
            raise NetworkError("Failed to record attendance.")
        self.flat.append(entry)


class InMemoryAttendance:
    """Two-table store whose transaction applies all staged writes or none."""

    def __init__(self):
        self.logs: list[VerificationLogEntry] = []
        self.flat: list[FlatAttendanceEntry] = []
        self.report_rows: list[AttendanceReportRow] = []
        self.fail_flat_insert = False
        # Simulates a device whose cached "today" snapshot is out of date.
        self.stale_reads = False

    def committed_records(self, student_id: str, day: date) -> list[AttendanceRecord]:
        return [e.to_record() for e in self.logs if e.student_id == student_id and e.attend_date == day]

    def fetch_today_records(self, student_id: str, day: date):
        if self.stale_reads:
            return []
        return self.committed_records(student_id, day)

    @contextmanager
    def transaction(self):
        writer = _Writer(self)
        yield writer
        self.logs.extend(writer.logs)
        self.flat.extend(writer.flat)

    def list_for_date(self, day: date, *, course_code=None):
        return [f for f in self.flat if f.attend_date == day and (not course_code or f.course_code == course_code)]

    def get_report_rows(self, *, start_date, end_date, course_code=None, student_id=None):
        return list(self.report_rows)

    def add_existing(self, *, student: Student, course: Course, at: datetime, method=VerificationMethod.PASSCODE):
        self.logs.append(
            VerificationLogEntry(
                student_id=student.student_id,
                course_id=course.course_id,
                course_code=course.code,
                attend_date=at.date(),
                status=AttendanceStatus.PRESENT,
                method=method,
                marked_by="Self (Passcode)",
                timestamp=at,
            )
        )


@pytest.fixture
def fixed_now() -> datetime:
    # 2024-01-01 is a Monday.
    return datetime(2024, 1, 1, 10, 15, 30)


@pytest.fixture
def student() -> Student:
    return Student(
        student_id="stu-0001",
        full_name="Ada Obi",
        registration_number="CSC/2021/001",
        department_id=1,
        department="Computer Science",
        level_id=4,
        level="400",
    )


@pytest.fixture
def course() -> Course:
    return Course(
        course_id=1,
        code="CSC412",
        name="Software Engineering",
        department_id=1,
        level_id=4,
        session_day="Monday",
        session_time="10:00 AM",
        duration="2 Hours",
        latitude=CLASSROOM[0],
        longitude=CLASSROOM[1],
        radius_meters=50,
    )


@pytest.fixture
def open_course() -> Course:
    """Always open and not geofenced."""
    return Course(course_id=2, code="MTH201", name="Linear Algebra", department_id=1, level_id=4)


@pytest.fixture
def students(student) -> InMemoryStudents:
    return InMemoryStudents({student.student_id: student})


@pytest.fixture
def courses(course, open_course) -> InMemoryCourses:
    return InMemoryCourses([course, open_course])


@pytest.fixture
def attendance() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def service(attendance, students, courses) -> CheckInService:
    return CheckInService(attendance, students, courses)
