from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .repository import AttendanceRepository


class AttendanceLogService:
    """Admin/staff view of the flat attendance rows for one day."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def list_for_date(self, *, current_role: Role, day: date, course_code: Optional[str] = None) -> list[dict]:
        if current_role not in (Role.ADMIN, Role.STAFF):
            raise AuthorizationError("You do not have permission to view the attendance log")

        rows = self._attendance.list_for_date(day, course_code=(course_code or "").strip().upper() or None)
        return [
            {
                "name": r.name,
                "date": r.attend_date.strftime("%Y-%m-%d"),
                "course_code": r.course_code,
                "registration_number": r.registration_number,
                "department": r.department or "-",
                "level": r.level or "-",
                "method": r.method,
            }
            for r in rows
        ]
