from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_float, store_errors
from .model import Course
from .repository import CourseRepository

_COLUMNS = """
    course_id, code, name, department_id, level_id,
    session_day, session_time, duration,
    latitude, longitude, radius_meters, total_sessions
"""


def _to_course(r: dict) -> Course:
    return Course(
        course_id=int(r["course_id"]),
        code=r["code"],
        name=r["name"],
        department_id=r.get("department_id"),
        level_id=r.get("level_id"),
        session_day=r.get("session_day") or "",
        session_time=r.get("session_time") or "",
        duration=r.get("duration") or "",
        latitude=optional_float(r.get("latitude")),
        longitude=optional_float(r.get("longitude")),
        radius_meters=optional_float(r.get("radius_meters")),
        total_sessions=int(r.get("total_sessions") or 0),
    )


class MySQLCourseRepository(CourseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_code(self, code: str) -> Optional[Course]:
        with store_errors("load course"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM courses WHERE code=%s", (code.upper(),))
            r = fetchone(cur)
            return _to_course(r) if r else None

    def list_for_student(self, *, department_id: Optional[int], level_id: Optional[int]) -> Sequence[Course]:
        with store_errors("load courses"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM courses
                WHERE department_id <=> %s AND level_id <=> %s
                ORDER BY code ASC
                """,
                (department_id, level_id),
            )
            return [_to_course(r) for r in fetchall(cur)]
