from .config import Config

SECRET_KEY = "test-secret"
DB_CONFIG = Config.db_config()

LATE_CUTOFF = "09:30"
TIMEZONE = "UTC"
LOG_LEVEL = "DEBUG"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
