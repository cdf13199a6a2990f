import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", "password"),
    "database": os.getenv("DB_NAME", "payroll_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

OVERTIME_MAX_DURATION_PER_DAY_MILLIS = int(os.getenv("OVERTIME_MAX_DURATION_PER_DAY_MILLIS", str(3 * 60 * 60 * 1000)))
# preference, could be 20, 30, etc.
PAYROLL_DAYS_PER_MONTH_PRORATE = int(os.getenv("PAYROLL_DAYS_PER_MONTH_PRORATE", "22"))
PAYROLL_MAX_WORKING_MILLIS_PER_DAY = int(os.getenv("PAYROLL_MAX_WORKING_MILLIS_PER_DAY", str(8 * 60 * 60 * 1000)))
