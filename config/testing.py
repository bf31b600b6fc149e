from .config import *  # noqa: F401,F403

CRON_SECRET = "test-cron-secret"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
