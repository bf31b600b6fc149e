"""Settings shared by every environment. Environment modules import * and override."""
import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_tracker"),
}

# Organisation wall clock
TIMEZONE = os.getenv("TIMEZONE", "Asia/Bangkok")

# Bearer token the external scheduler sends to /api/cron/*
CRON_SECRET = os.getenv("CRON_SECRET", "")

# Reminder timing. The poller must run at least every 2 x tolerance.
PRE_COMPLETION_OFFSET_MINUTES = int(os.getenv("PRE_COMPLETION_OFFSET_MINUTES", "10"))
REMINDER_TOLERANCE_MINUTES = int(os.getenv("REMINDER_TOLERANCE_MINUTES", "2"))
REMINDER_POLL_INTERVAL_MINUTES = int(os.getenv("REMINDER_POLL_INTERVAL_MINUTES", "4"))
REMINDER_MAX_WORKERS = int(os.getenv("REMINDER_MAX_WORKERS", "1"))

WORKDAY_TOTAL_HOURS = float(os.getenv("WORKDAY_TOTAL_HOURS", "9"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False

# If enabled, app will apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
# Optional: also load database/seed.sql (public holidays)
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
