import os

from config.config import (
    JWT_EXPIRES_MINUTES,
    JWT_REFRESH_WINDOW_MINUTES,
    LATE_AFTER,
    PAYROLL_POLICY,
    db_config_from_env,
    env_flag,
)

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
JWT_SECRET = os.getenv("JWT_SECRET", "please-set-JWT_SECRET")

DB_CONFIG = db_config_from_env()

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
