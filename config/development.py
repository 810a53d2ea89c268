import os

from .config import Config

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = Config.db_config()

LATE_CUTOFF = Config.LATE_CUTOFF
TIMEZONE = Config.TIMEZONE
LOG_LEVEL = Config.LOG_LEVEL

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
AUTO_SEED_DB = Config.AUTO_SEED_DB
