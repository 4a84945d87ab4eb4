import os

from config.config import (
    JWT_EXPIRES_MINUTES,
    JWT_REFRESH_WINDOW_MINUTES,
    LATE_AFTER,
    PAYROLL_POLICY,
    db_config_from_env,
    env_flag,
)

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
JWT_SECRET = os.getenv("JWT_SECRET", SECRET_KEY)

DB_CONFIG = db_config_from_env()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed the demo admin/employee accounts on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
