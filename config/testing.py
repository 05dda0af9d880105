import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_attendance_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

CODE_GRACE_SECONDS = 10
DEFAULT_RADIUS_METERS = 50.0
ADMIN_FALLBACK_CODE = "0000"
SCHEDULE_FAIL_CLOSED = False
ROTATING_CODE_SECRET = None

LOG_LEVEL = "WARNING"
LOG_FILE = None
