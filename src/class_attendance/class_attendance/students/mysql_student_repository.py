from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, store_errors
from .model import Student
from .repository import StudentRepository


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with store_errors("load student"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.student_id, s.full_name, s.registration_number,
                       s.department_id, d.name AS department,
                       s.level_id, l.label AS level
                FROM students s
                LEFT JOIN departments d ON d.department_id = s.department_id
                LEFT JOIN levels l ON l.level_id = s.level_id
                WHERE s.student_id=%s
                """,
                (str(student_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Student(
                student_id=str(r["student_id"]),
                full_name=r["full_name"],
                registration_number=r["registration_number"],
                department_id=r.get("department_id"),
                department=r.get("department") or "",
                level_id=r.get("level_id"),
                level=r.get("level") or "",
            )
