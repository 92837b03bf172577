import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "epiviu_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

API_PREFIX = "/api"
TOKEN_MAX_AGE_SECONDS = 3600
DEFAULT_STAFF_PASSWORD = "1234"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
