from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .constants import CODE_GRACE_SECONDS, DEFAULT_RADIUS_METERS


@dataclass(frozen=True)
class EngineSettings:
    """Check-in tunables read from the active settings module."""

    code_grace_seconds: int = CODE_GRACE_SECONDS
    default_radius_meters: float = DEFAULT_RADIUS_METERS
    admin_fallback_code: str = "0000"
    schedule_fail_closed: bool = False
    rotating_code_secret: Optional[str] = None

    @classmethod
    def from_settings(cls, settings) -> "EngineSettings":
        return cls(
            code_grace_seconds=int(getattr(settings, "CODE_GRACE_SECONDS", CODE_GRACE_SECONDS)),
            default_radius_meters=float(getattr(settings, "DEFAULT_RADIUS_METERS", DEFAULT_RADIUS_METERS)),
            admin_fallback_code=str(getattr(settings, "ADMIN_FALLBACK_CODE", "0000") or ""),
            schedule_fail_closed=bool(getattr(settings, "SCHEDULE_FAIL_CLOSED", False)),
            rotating_code_secret=getattr(settings, "ROTATING_CODE_SECRET", None) or None,
        )
