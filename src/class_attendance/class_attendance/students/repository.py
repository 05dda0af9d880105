from __future__ import annotations

from typing import Optional, Protocol

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for students.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError
