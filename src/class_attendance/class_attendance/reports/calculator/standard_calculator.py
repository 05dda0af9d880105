from __future__ import annotations

from .base import RateCalculator
from ...attendance.model import AttendanceReportRow
from ...core.constants import DEFAULT_TOTAL_SESSIONS


class StandardRateCalculator(RateCalculator):
    """Standard rule: attended / total_sessions, capped at 100%."""

    def rate_percent(self, row: AttendanceReportRow) -> float:
        total = int(row.total_sessions or DEFAULT_TOTAL_SESSIONS)
        percent = 100.0 * int(row.attended) / total
        return round(min(percent, 100.0), 1)
