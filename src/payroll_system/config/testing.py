import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", "password"),
    "database": os.getenv("DB_NAME", "payroll_test_db"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"

OVERTIME_MAX_DURATION_PER_DAY_MILLIS = 3 * 60 * 60 * 1000
PAYROLL_DAYS_PER_MONTH_PRORATE = 22
PAYROLL_MAX_WORKING_MILLIS_PER_DAY = 8 * 60 * 60 * 1000
