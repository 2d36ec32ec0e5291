import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "churchcrm"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "churchcrm"),
}

# Never expose exception detail in API responses.
DEBUG = bool(int(os.getenv("DEBUG", "0")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

TOKEN_TTL_HOURS = int(os.getenv("TOKEN_TTL_HOURS", "24"))
REMEMBER_TTL_DAYS = int(os.getenv("REMEMBER_TTL_DAYS", "14"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
