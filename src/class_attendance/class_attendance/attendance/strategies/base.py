from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import VerificationMethod
from ...courses.model import Course
from ..capabilities import BiometricVerifier


@dataclass(frozen=True)
class MethodInput:
    """What the student (or staff member) supplied for the chosen method."""

    passcode: Optional[str] = None
    biometric: Optional[BiometricVerifier] = None
    face_match: Optional[bool] = None


class VerificationStrategy(ABC):
    """Strategy Pattern: one way of proving presence."""

    method: VerificationMethod
    flat_label: str
    requires_geofence: bool = True

    @abstractmethod
    def verify(self, *, course: Course, now: datetime, supplied: MethodInput) -> None:
        """Return on success; raise VerificationFailed / PermissionDenied otherwise."""

        raise NotImplementedError

    def marked_by(self, supplied: MethodInput) -> str:
        return f"Self ({self.flat_label})"
