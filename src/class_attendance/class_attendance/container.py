from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.code_service import SessionCodeService
from .attendance.factory import VerificationStrategyFactory
from .attendance.geofence import GeofenceValidator
from .attendance.log_service import AttendanceLogService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.rotating_code import RotatingCodeGenerator
from .attendance.schedule_window import ScheduleWindowEvaluator
from .attendance.service import CheckInService
from .core.settings import EngineSettings
from .courses.mysql_course_repository import MySQLCourseRepository
from .courses.repository import CourseRepository
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import AttendanceReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    students_repo: StudentRepository
    courses_repo: CourseRepository
    attendance_repo: AttendanceRepository

    checkin_service: CheckInService
    code_service: SessionCodeService
    log_service: AttendanceLogService
    report_service: AttendanceReportService


def build_services(
    *,
    students: StudentRepository,
    courses: CourseRepository,
    attendance: AttendanceRepository,
    engine: EngineSettings,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    codes = RotatingCodeGenerator(grace_seconds=engine.code_grace_seconds, secret=engine.rotating_code_secret)

    checkin_service = CheckInService(
        attendance,
        students,
        courses,
        strategy_factory=VerificationStrategyFactory(codes=codes, admin_fallback_code=engine.admin_fallback_code),
        schedule=ScheduleWindowEvaluator(fail_closed=engine.schedule_fail_closed),
        geofence=GeofenceValidator(default_radius_meters=engine.default_radius_meters),
    )

    return Container(
        conn=conn,
        students_repo=students,
        courses_repo=courses,
        attendance_repo=attendance,
        checkin_service=checkin_service,
        code_service=SessionCodeService(courses, codes=codes),
        log_service=AttendanceLogService(attendance),
        report_service=AttendanceReportService(attendance),
    )


def build_container(*, db_config: dict, engine: Optional[EngineSettings] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        students=MySQLStudentRepository(conn),
        courses=MySQLCourseRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        engine=engine or EngineSettings(),
        conn=conn,
    )
