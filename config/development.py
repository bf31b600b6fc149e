import os

from .config import *  # noqa: F401,F403

CRON_SECRET = os.getenv("CRON_SECRET", "dev-cron-secret")

DEBUG = bool(int(os.getenv("DEBUG", "1")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
