from datetime import datetime, time

from src.class_attendance.class_attendance.attendance.schedule_window import (
    ScheduleWindowEvaluator,
    parse_duration_hours,
    parse_session_time,
    pick_active_course,
)
from src.class_attendance.class_attendance.courses.model import Course


def _course(code="CSC412", day="Monday", at="10:00 AM", duration="2 Hours") -> Course:
    return Course(course_id=1, code=code, name=code, session_day=day, session_time=at, duration=duration)


def test_monday_course_open_mid_session():
    check = ScheduleWindowEvaluator().evaluate(_course(), datetime(2024, 1, 1, 11, 30))

    assert check.valid
    assert check.reason is None


def test_session_ended_reports_end_time():
    check = ScheduleWindowEvaluator().evaluate(_course(), datetime(2024, 1, 1, 13, 0))

    assert not check.valid
    assert check.reason == "Attendance session has ended. It was available until 12:00 PM."


def test_session_not_started_reports_start_time():
    check = ScheduleWindowEvaluator().evaluate(_course(), datetime(2024, 1, 1, 9, 59))

    assert not check.valid
    assert check.reason == "Attendance hasn't started yet. It starts at 10:00 AM."


def test_window_bounds_are_inclusive():
    evaluator = ScheduleWindowEvaluator()

    assert evaluator.evaluate(_course(), datetime(2024, 1, 1, 10, 0)).valid
    assert evaluator.evaluate(_course(), datetime(2024, 1, 1, 12, 0)).valid
    assert not evaluator.evaluate(_course(), datetime(2024, 1, 1, 12, 0, 1)).valid


def test_wrong_day_names_both_days():
    check = ScheduleWindowEvaluator().evaluate(_course(), datetime(2024, 1, 2, 10, 30))

    assert not check.valid
    assert "Monday" in check.reason
    assert "Tuesday" in check.reason


def test_day_comparison_ignores_case():
    assert ScheduleWindowEvaluator().evaluate(_course(day="monday"), datetime(2024, 1, 1, 10, 30)).valid


def test_empty_day_and_time_always_open():
    course = _course(day="", at="", duration="")

    assert ScheduleWindowEvaluator().evaluate(course, datetime(2024, 1, 6, 3, 0)).valid


def test_empty_day_still_checks_time():
    check = ScheduleWindowEvaluator().evaluate(_course(day=""), datetime(2024, 1, 3, 8, 0))

    assert not check.valid
    assert "starts at 10:00 AM" in check.reason


def test_missing_duration_defaults_to_one_hour():
    check = ScheduleWindowEvaluator().evaluate(_course(duration=""), datetime(2024, 1, 1, 11, 30))

    assert not check.valid
    assert check.reason.endswith("until 11:00 AM.")


def test_parse_session_time_twelve_hour_edges():
    assert parse_session_time("12 AM") == time(0, 0)
    assert parse_session_time("12:30 PM") == time(12, 30)
    assert parse_session_time("9:05pm") == time(21, 5)
    assert parse_session_time("10 AM") == time(10, 0)
    assert parse_session_time("noon") is None


def test_parse_duration_hours():
    assert parse_duration_hours("2 Hours") == 2
    assert parse_duration_hours("3") == 3
    assert parse_duration_hours("0 Hours") == 0
    assert parse_duration_hours("about two") is None


def test_unparseable_time_fails_open_by_default():
    course = _course(at="after lunch")

    assert ScheduleWindowEvaluator().evaluate(course, datetime(2024, 1, 1, 7, 0)).valid


def test_unparseable_time_rejected_when_fail_closed():
    course = _course(at="after lunch")

    check = ScheduleWindowEvaluator(fail_closed=True).evaluate(course, datetime(2024, 1, 1, 7, 0))

    assert not check.valid
    assert "after lunch" in check.reason


def test_unparseable_duration_rejected_only_when_fail_closed():
    course = _course(duration="a while")
    now = datetime(2024, 1, 1, 10, 30)

    assert ScheduleWindowEvaluator().evaluate(course, now).valid
    assert not ScheduleWindowEvaluator(fail_closed=True).evaluate(course, now).valid


def test_pick_active_course_prefers_open_session():
    closed = _course(code="CSC401", day="Wednesday")
    open_now = _course(code="CSC412")

    assert pick_active_course([closed, open_now], datetime(2024, 1, 1, 10, 30)).code == "CSC412"
    assert pick_active_course([closed], datetime(2024, 1, 1, 10, 30)).code == "CSC401"
    assert pick_active_course([], datetime(2024, 1, 1, 10, 30)) is None


def test_zero_duration_means_one_hour_even_when_fail_closed():
    course = _course(duration="0 Hours")
    evaluator = ScheduleWindowEvaluator(fail_closed=True)

    assert evaluator.evaluate(course, datetime(2024, 1, 1, 10, 30)).valid
    check = evaluator.evaluate(course, datetime(2024, 1, 1, 11, 30))
    assert not check.valid
    assert check.reason.endswith("until 11:00 AM.")
