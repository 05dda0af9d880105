"""Schedule window: is a course session open for check-in right now?

Course schedules are stored as the strings typed on the admin side
(``session_day="Monday"``, ``session_time="10:00 AM"``,
``duration="2 Hours"``). An empty day or time disables that part of the
check. Strings that cannot be parsed let the student through unless the
evaluator is built with ``fail_closed=True``.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import format_clock, weekday_name
from ..core.constants import DEFAULT_DURATION_HOURS
from ..courses.model import Course

logger = logging.getLogger(__name__)

_SESSION_TIME = re.compile(r"(\d+):?(\d+)?\s*(AM|PM)", re.IGNORECASE)
_LEADING_INT = re.compile(r"^\s*(\d+)")


@dataclass(frozen=True)
class ScheduleCheck:
    valid: bool
    reason: Optional[str] = None


OPEN = ScheduleCheck(valid=True)


def parse_session_time(value: str) -> Optional[time]:
    """``"H[:MM] AM|PM"`` to a 24-hour time; None when it does not parse."""
    match = _SESSION_TIME.search(value or "")
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2) or 0)
    meridiem = match.group(3).upper()

    if meridiem == "PM" and hours < 12:
        hours += 12
    if meridiem == "AM" and hours == 12:
        hours = 0

    try:
        return time(hour=hours, minute=minutes)
    except ValueError:
        return None


def parse_duration_hours(value: str) -> Optional[int]:
    """Leading whole number of hours (``"2 Hours"`` -> 2); None when there is none."""
    match = _LEADING_INT.match(value or "")
    if not match:
        return None
    return int(match.group(1))


class ScheduleWindowEvaluator:
    def __init__(self, *, fail_closed: bool = False):
        self._fail_closed = bool(fail_closed)

    def evaluate(self, course: Course, now: datetime) -> ScheduleCheck:
        return self.evaluate_window(
            session_day=course.session_day,
            session_time=course.session_time,
            duration=course.duration,
            now=now,
        )

    def evaluate_window(self, *, session_day: str, session_time: str, duration: str, now: datetime) -> ScheduleCheck:
        today = weekday_name(now)
        if session_day and session_day.strip().lower() != today.lower():
            return ScheduleCheck(
                valid=False,
                reason=f"This course is scheduled for {session_day}, but today is {today}.",
            )

        if not session_time:
            return OPEN

        start_time = parse_session_time(session_time)
        if start_time is None:
            return self._unparseable("session time", session_time)

        hours = parse_duration_hours(duration)
        if hours is None:
            if duration and duration.strip() and self._fail_closed:
                return self._unparseable("duration", duration)
            hours = DEFAULT_DURATION_HOURS
        elif hours == 0:
            hours = DEFAULT_DURATION_HOURS

        start = datetime.combine(now.date(), start_time)
        end = start + timedelta(hours=hours)

        if now < start:
            return ScheduleCheck(valid=False, reason=f"Attendance hasn't started yet. It starts at {session_time}.")
        if now > end:
            return ScheduleCheck(
                valid=False,
                reason=f"Attendance session has ended. It was available until {format_clock(end)}.",
            )
        return OPEN

    def _unparseable(self, field: str, value: str) -> ScheduleCheck:
        if self._fail_closed:
            return ScheduleCheck(valid=False, reason=f"The course {field} {value!r} is not a valid schedule.")
        logger.info("Unparseable %s %r, allowing check-in", field, value)
        return OPEN


def pick_active_course(
    courses: Sequence[Course],
    now: datetime,
    evaluator: Optional[ScheduleWindowEvaluator] = None,
) -> Optional[Course]:
    """First course open right now, else the first course, else None."""
    if not courses:
        return None
    evaluator = evaluator or ScheduleWindowEvaluator()
    for course in courses:
        if evaluator.evaluate(course, now).valid:
            return course
    return courses[0]
