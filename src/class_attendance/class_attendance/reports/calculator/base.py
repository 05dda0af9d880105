from __future__ import annotations

from abc import ABC, abstractmethod

from ...attendance.model import AttendanceReportRow


class RateCalculator(ABC):
    """Calculator interface (Strategy Pattern for attendance rates)."""

    @abstractmethod
    def rate_percent(self, row: AttendanceReportRow) -> float:
        raise NotImplementedError
