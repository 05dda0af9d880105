from __future__ import annotations

from datetime import datetime

from ...core.enums import VerificationMethod
from ...core.exceptions import PermissionDenied, VerificationFailed
from ...courses.model import Course
from .base import MethodInput, VerificationStrategy


class BiometricStrategy(VerificationStrategy):
    """Device fingerprint prompt, treated as a yes/no oracle."""

    method = VerificationMethod.BIOMETRIC
    flat_label = "Fingerprint"

    def verify(self, *, course: Course, now: datetime, supplied: MethodInput) -> None:
        if supplied.biometric is None:
            raise PermissionDenied("Your device does not support or have biometrics enrolled.")
        try:
            matched = supplied.biometric.authenticate("Place your finger to mark attendance")
        except TimeoutError as e:
            raise VerificationFailed("Biometric authentication timed out.") from e
        if not matched:
            raise VerificationFailed("Biometric authentication failed.")
