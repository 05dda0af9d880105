from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_TOTAL_SESSIONS


@dataclass(frozen=True)
class Course:
    """Domain entity: a course and its session configuration.

    ``session_day``/``session_time``/``duration`` are the free-form strings
    entered on the admin side ("Monday", "10:00 AM", "2 Hours"); an empty
    value disables the corresponding check. A course without both
    coordinates is not geofenced.
    """

    course_id: int
    code: str
    name: str
    department_id: Optional[int] = None
    level_id: Optional[int] = None
    session_day: str = ""
    session_time: str = ""
    duration: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius_meters: Optional[float] = None
    total_sessions: int = DEFAULT_TOTAL_SESSIONS

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None
