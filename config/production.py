import os

from .config import *  # noqa: F401,F403

# Empty secret rejects every cron call.
CRON_SECRET = os.getenv("CRON_SECRET", "")

DEBUG = False
