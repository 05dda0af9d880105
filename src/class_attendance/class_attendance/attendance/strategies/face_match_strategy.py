from __future__ import annotations

from datetime import datetime

from ...core.enums import VerificationMethod
from ...core.exceptions import VerificationFailed
from ...courses.model import Course
from .base import MethodInput, VerificationStrategy


class FaceMatchStrategy(VerificationStrategy):
    """Staff-initiated: the external face-matching service recognised the student."""

    method = VerificationMethod.FACE_MATCH
    flat_label = "Face Match"
    requires_geofence = False

    def verify(self, *, course: Course, now: datetime, supplied: MethodInput) -> None:
        if not supplied.face_match:
            raise VerificationFailed("Student not found or confidence too low. Please try again.")

    def marked_by(self, supplied: MethodInput) -> str:
        return f"Staff ({self.flat_label})"
