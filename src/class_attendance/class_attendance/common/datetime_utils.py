from __future__ import annotations

from datetime import date, datetime

from ..core.constants import WEEKDAY_NAMES


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local (device) time, naive.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def weekday_name(moment: date) -> str:
    return WEEKDAY_NAMES[moment.weekday()]


def format_clock(moment: datetime) -> str:
    """12-hour wall clock, e.g. ``12:00 PM``."""
    return moment.strftime("%I:%M %p")
