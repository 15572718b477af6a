import os

# No database unless one is explicitly provided; stores fall back to "not configured".
DB_CONFIG = None
if os.getenv("DB_HOST"):
    DB_CONFIG = {
        "host": os.getenv("DB_HOST"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", ""),
        "database": os.getenv("DB_NAME", "timesheet_test"),
        "connection_timeout": 3,
    }

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

TIMEZONE = "Africa/Accra"
AUTO_CLOSE_HOUR = 22

AUTO_INIT_DB = False
SCHEDULER_ENABLED = False
