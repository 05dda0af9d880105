from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: Student.

    Note: a plain data object, immutable for the duration of a check-in.
    """

    student_id: str
    full_name: str
    registration_number: str
    department_id: Optional[int] = None
    department: str = ""
    level_id: Optional[int] = None
    level: str = ""
