import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_attendance"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Check-in engine
CODE_GRACE_SECONDS = int(os.getenv("CODE_GRACE_SECONDS", "10"))
DEFAULT_RADIUS_METERS = float(os.getenv("DEFAULT_RADIUS_METERS", "50"))
ADMIN_FALLBACK_CODE = os.getenv("ADMIN_FALLBACK_CODE", "0000")
SCHEDULE_FAIL_CLOSED = bool(int(os.getenv("SCHEDULE_FAIL_CLOSED", "0")))
ROTATING_CODE_SECRET = os.getenv("ROTATING_CODE_SECRET") or None

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None
