"""Example: use the service layer directly (no Flask).

Prints the rotating session code staff would show for a course.
"""

import importlib

from config import get_settings_module

from src.class_attendance.class_attendance.container import build_container
from src.class_attendance.class_attendance.core.enums import Role
from src.class_attendance.class_attendance.core.settings import EngineSettings


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, engine=EngineSettings.from_settings(settings))
    current = container.code_service.rotating_code(current_role=Role.STAFF, course_code="CSC412")
    print(f"CSC412 code: {current.code} (rotates in {current.seconds_left}s)")


if __name__ == "__main__":
    main()
