import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "student_attendance"),
}

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# If enabled, app will apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed CS101 sample data and demo accounts on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
