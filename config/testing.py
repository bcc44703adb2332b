import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_test_db"),
}

DEBUG = False
TESTING = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
