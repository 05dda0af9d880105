from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role attached to the signed-in user by the identity provider."""

    ADMIN = "admin"
    STAFF = "staff"
    STUDENT = "student"


class VerificationMethod(str, Enum):
    """How a student proves presence for one check-in."""

    BIOMETRIC = "biometric"
    PASSCODE = "passcode"
    ADMIN_CODE = "admin_code"
    FACE_MATCH = "face_match"


class AttemptState(str, Enum):
    METHOD_SELECT = "method_select"
    VERIFYING = "verifying"
    SUCCESS = "success"
    FAILURE = "failure"


class FailureKind(str, Enum):
    """Terminal, user-visible reasons a check-in is refused."""

    SCHEDULE_CLOSED = "schedule_closed"
    ALREADY_MARKED = "already_marked"
    OUT_OF_RANGE = "out_of_range"
    PERMISSION_DENIED = "permission_denied"
    VERIFICATION_FAILED = "verification_failed"
    NETWORK_ERROR = "network_error"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
