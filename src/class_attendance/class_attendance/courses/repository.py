from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Course


class CourseRepository(Protocol):
    def get_by_code(self, code: str) -> Optional[Course]:
        raise NotImplementedError

    def list_for_student(self, *, department_id: Optional[int], level_id: Optional[int]) -> Sequence[Course]:
        """Courses offered to a department/level pair, ordered by code."""

        raise NotImplementedError
