from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..core.enums import AttendanceStatus, VerificationMethod


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark.

    At most one may exist per (student_id, course_code, attend_date).
    """

    student_id: str
    course_code: str
    attend_date: date
    method: VerificationMethod
    timestamp: datetime


@dataclass(frozen=True)
class VerificationLogEntry:
    """Normalized log row (student, course, status, method, timestamp)."""

    student_id: str
    course_id: int
    course_code: str
    attend_date: date
    status: AttendanceStatus
    method: VerificationMethod
    marked_by: str
    timestamp: datetime

    def to_record(self) -> AttendanceRecord:
        return AttendanceRecord(
            student_id=self.student_id,
            course_code=self.course_code,
            attend_date=self.attend_date,
            method=self.method,
            timestamp=self.timestamp,
        )


@dataclass(frozen=True)
class FlatAttendanceEntry:
    """Denormalized row kept for reporting compatibility."""

    name: str
    attend_date: date
    course_code: str
    registration_number: str
    department: str
    level: str
    method: str


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports: attended sessions per student and course."""

    student_id: str
    full_name: str
    registration_number: str
    course_code: str
    course_name: str
    total_sessions: int
    attended: int
