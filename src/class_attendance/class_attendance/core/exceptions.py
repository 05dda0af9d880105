from __future__ import annotations

from typing import Optional

from .enums import FailureKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class CheckInError(DomainError):
    """A check-in attempt was refused. Always terminal, never retried."""

    kind: FailureKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ScheduleClosed(CheckInError):
    kind = FailureKind.SCHEDULE_CLOSED

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class AlreadyMarked(CheckInError):
    kind = FailureKind.ALREADY_MARKED

    def __init__(self, message: str = "You have already marked attendance for this course today."):
        super().__init__(message)


class OutOfRange(CheckInError):
    kind = FailureKind.OUT_OF_RANGE

    def __init__(self, distance_meters: float, radius_meters: float):
        super().__init__(
            f"You are approximately {round(distance_meters)}m away from the class location. "
            f"You must be within {round(radius_meters)}m to mark attendance."
        )
        self.distance_meters = distance_meters
        self.radius_meters = radius_meters


class PermissionDenied(CheckInError):
    kind = FailureKind.PERMISSION_DENIED


class VerificationFailed(CheckInError):
    kind = FailureKind.VERIFICATION_FAILED


class NetworkError(CheckInError):
    kind = FailureKind.NETWORK_ERROR

    def __init__(self, message: str = "Could not reach the attendance store.", *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class AttemptCancelled(Exception):
    """The user backed out of a capability prompt. Not a failure."""
