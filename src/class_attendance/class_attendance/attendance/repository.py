from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceReportRow, FlatAttendanceEntry, VerificationLogEntry


class AttendanceWriter(Protocol):
    """Writes staged inside one store transaction."""

    def fetch_today_records(self, student_id: str, day: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def insert_log(self, entry: VerificationLogEntry) -> None:
        """Must raise AlreadyMarked if (student, course, day) already exists."""

        raise NotImplementedError

    def insert_flat_record(self, entry: FlatAttendanceEntry) -> None:
        raise NotImplementedError


class AttendanceRepository(Protocol):
    def fetch_today_records(self, student_id: str, day: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def transaction(self) -> AbstractContextManager[AttendanceWriter]:
        """All writes made through the yielded writer commit together or not at all."""

        raise NotImplementedError

    def list_for_date(self, day: date, *, course_code: Optional[str] = None) -> Sequence[FlatAttendanceEntry]:
        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        course_code: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
