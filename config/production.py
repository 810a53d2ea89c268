import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = Config.db_config()

LATE_CUTOFF = Config.LATE_CUTOFF
TIMEZONE = Config.TIMEZONE
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
