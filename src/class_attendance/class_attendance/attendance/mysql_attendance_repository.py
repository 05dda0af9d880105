from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional, Sequence

from ..core.enums import VerificationMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, store_errors
from .model import AttendanceRecord, AttendanceReportRow, FlatAttendanceEntry, VerificationLogEntry
from .repository import AttendanceRepository, AttendanceWriter


def _select_today(cur, student_id: str, day: date) -> list[AttendanceRecord]:
    cur.execute(
        """
        SELECT student_id, course_code, attend_date, method, logged_at
        FROM attendance_logs
        WHERE student_id=%s AND attend_date=%s
        ORDER BY logged_at ASC
        """,
        (str(student_id), day),
    )
    return [
        AttendanceRecord(
            student_id=str(r["student_id"]),
            course_code=r["course_code"],
            attend_date=r["attend_date"],
            method=VerificationMethod(r["method"]),
            timestamp=r["logged_at"],
        )
        for r in fetchall(cur)
    ]


class _MySQLAttendanceWriter(AttendanceWriter):
    def __init__(self, cur):
        self._cur = cur

    def fetch_today_records(self, student_id: str, day: date) -> Sequence[AttendanceRecord]:
        return _select_today(self._cur, student_id, day)

    def insert_log(self, entry: VerificationLogEntry) -> None:
        # uq_log_student_course_day backs the one-mark-per-day rule.
        self._cur.execute(
            """
            INSERT INTO attendance_logs(student_id, course_id, course_code, attend_date, status, method, marked_by, logged_at)
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                entry.student_id,
                int(entry.course_id),
                entry.course_code,
                entry.attend_date,
                entry.status.value,
                entry.method.value,
                entry.marked_by,
                entry.timestamp,
            ),
        )

    def insert_flat_record(self, entry: FlatAttendanceEntry) -> None:
        self._cur.execute(
            """
            INSERT INTO attendance(name, date, course_code, registration_number, department, level, method)
            VALUES(%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                entry.name,
                entry.attend_date,
                entry.course_code,
                entry.registration_number,
                entry.department or None,
                entry.level or None,
                entry.method,
            ),
        )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_today_records(self, student_id: str, day: date) -> Sequence[AttendanceRecord]:
        with store_errors("load today's attendance"), db_cursor(self._conn_factory) as (_, cur):
            return _select_today(cur, student_id, day)

    @contextmanager
    def transaction(self) -> Iterator[AttendanceWriter]:
        with store_errors("record attendance"), db_cursor(self._conn_factory) as (_, cur):
            yield _MySQLAttendanceWriter(cur)

    def list_for_date(self, day: date, *, course_code: Optional[str] = None) -> Sequence[FlatAttendanceEntry]:
        clauses = ["date=%s"]
        params: list[object] = [day]
        if course_code:
            clauses.append("course_code=%s")
            params.append(course_code.upper())

        where = " AND ".join(clauses)

        with store_errors("load attendance log"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT name, date, course_code, registration_number, department, level, method
                FROM attendance
                WHERE {where}
                ORDER BY course_code ASC, name ASC
                """,
                tuple(params),
            )
            return [
                FlatAttendanceEntry(
                    name=r["name"],
                    attend_date=r["date"],
                    course_code=r.get("course_code") or "",
                    registration_number=r.get("registration_number") or "",
                    department=r.get("department") or "",
                    level=r.get("level") or "",
                    method=r.get("method") or "",
                )
                for r in fetchall(cur)
            ]

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        course_code: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["al.attend_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if course_code:
            clauses.append("c.code=%s")
            params.append(course_code.upper())
        if student_id is not None:
            clauses.append("s.student_id=%s")
            params.append(str(student_id))

        where = " AND ".join(clauses)

        with store_errors("build attendance report"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    s.student_id, s.full_name, s.registration_number,
                    c.code AS course_code, c.name AS course_name, c.total_sessions,
                    COUNT(al.log_id) AS attended
                FROM attendance_logs al
                JOIN students s ON s.student_id = al.student_id
                JOIN courses c ON c.course_id = al.course_id
                WHERE {where}
                GROUP BY s.student_id, s.full_name, s.registration_number, c.code, c.name, c.total_sessions
                ORDER BY c.code ASC, s.registration_number ASC
                """,
                tuple(params),
            )
            return [
                AttendanceReportRow(
                    student_id=str(r["student_id"]),
                    full_name=r["full_name"],
                    registration_number=r["registration_number"],
                    course_code=r["course_code"],
                    course_name=r["course_name"],
                    total_sessions=int(r.get("total_sessions") or 0),
                    attended=int(r["attended"]),
                )
                for r in fetchall(cur)
            ]
