from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import VerificationMethod
from ..core.exceptions import ValidationError
from .rotating_code import RotatingCodeGenerator
from .strategies.admin_code_strategy import AdminCodeStrategy
from .strategies.base import VerificationStrategy
from .strategies.biometric_strategy import BiometricStrategy
from .strategies.face_match_strategy import FaceMatchStrategy
from .strategies.passcode_strategy import PasscodeStrategy


@dataclass
class VerificationStrategyFactory:
    """Factory Pattern: choose the strategy for the selected verification method."""

    codes: RotatingCodeGenerator = field(default_factory=RotatingCodeGenerator)
    admin_fallback_code: str = ""

    def for_method(self, method: VerificationMethod) -> VerificationStrategy:
        if method == VerificationMethod.BIOMETRIC:
            return BiometricStrategy()
        if method == VerificationMethod.PASSCODE:
            return PasscodeStrategy(self.codes)
        if method == VerificationMethod.ADMIN_CODE:
            return AdminCodeStrategy(self.admin_fallback_code)
        if method == VerificationMethod.FACE_MATCH:
            return FaceMatchStrategy()
        raise ValidationError(f"Unsupported verification method: {method}")
