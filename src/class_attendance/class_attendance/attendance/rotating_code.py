"""Per-minute check-in code shared by everyone in the same course.

Every client derives the same four digits from the course code, the local
calendar date and the ``HHMM`` of the minute, so nothing has to be
distributed. The default derivation is the public fold the mobile clients
use. Configuring a secret switches to a 4-digit, 60-second TOTP keyed per
course from that secret.
"""
from __future__ import annotations

import base64
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import pyotp

from ..common.validators import require_non_empty
from ..core.constants import CODE_DIGITS, CODE_GRACE_SECONDS, CODE_MODULUS
from ..core.exceptions import PermissionDenied
from ..courses.model import Course
from .capabilities import DeviceVerifier

logger = logging.getLogger(__name__)


def code_seed(course_code: str, at: datetime) -> str:
    return f"{course_code}-{at:%Y-%m-%d}-{at:%H%M}"


def fold_hash(seed: str) -> int:
    """``hash = (hash << 5) - hash + ord(ch)`` with signed 32-bit wraparound."""
    value = 0
    for ch in seed:
        value = (value * 31 + ord(ch)) & 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def course_secret(secret: str, course_code: str) -> str:
    """Base32 TOTP secret for one course, keyed by the configured master secret."""
    return base64.b32encode(f"{secret}:{course_code.upper()}".encode("utf-8")).decode("ascii")


def generate_code(course_code: str, at: datetime, *, minute_offset: int = 0, secret: Optional[str] = None) -> str:
    course_code = require_non_empty(course_code, "Course code")
    target = at + timedelta(minutes=minute_offset)

    if secret:
        totp = pyotp.TOTP(course_secret(secret, course_code), digits=CODE_DIGITS, interval=60)
        return totp.at(target)

    value = abs(fold_hash(code_seed(course_code, target)))
    return f"{value % CODE_MODULUS:0{CODE_DIGITS}d}"


def seconds_until_rotation(now: datetime) -> int:
    return 60 - now.second


@dataclass(frozen=True)
class RotatingCode:
    code: str
    seconds_left: int


class RotatingCodeGenerator:
    def __init__(self, *, grace_seconds: int = CODE_GRACE_SECONDS, secret: Optional[str] = None):
        self._grace_seconds = int(grace_seconds)
        self._secret = secret or None

    def current(self, course_code: str, now: datetime) -> RotatingCode:
        return RotatingCode(
            code=generate_code(course_code, now, secret=self._secret),
            seconds_left=seconds_until_rotation(now),
        )

    def accepts(self, course_code: str, submitted: str, now: datetime) -> bool:
        """Current minute's code, or the previous one during the first seconds of a minute."""
        if submitted == generate_code(course_code, now, secret=self._secret):
            return True
        if now.second < self._grace_seconds:
            return submitted == generate_code(course_code, now, minute_offset=-1, secret=self._secret)
        return False


class ManualCodeIssuer:
    """Random instructor code, shown only after the instructor's device confirms.

    Note: students are not checked against these codes.
    """

    def issue(self, course: Course, verifier: DeviceVerifier) -> str:
        if not verifier.confirm(f"Confirm to show the session code for {course.code}"):
            raise PermissionDenied("Device verification failed.")
        logger.info("Manual session code issued for %s", course.code)
        return f"{secrets.randbelow(CODE_MODULUS):0{CODE_DIGITS}d}"
