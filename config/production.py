import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_attendance"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

CODE_GRACE_SECONDS = int(os.getenv("CODE_GRACE_SECONDS", "10"))
DEFAULT_RADIUS_METERS = float(os.getenv("DEFAULT_RADIUS_METERS", "50"))
ADMIN_FALLBACK_CODE = os.getenv("ADMIN_FALLBACK_CODE", "0000")
SCHEDULE_FAIL_CLOSED = bool(int(os.getenv("SCHEDULE_FAIL_CLOSED", "0")))
ROTATING_CODE_SECRET = os.getenv("ROTATING_CODE_SECRET") or None

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/class_attendance.log")
