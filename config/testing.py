import os

from config.config import LATE_AFTER, PAYROLL_POLICY, db_config_from_env, env_flag

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"
JWT_EXPIRES_MINUTES = 60
JWT_REFRESH_WINDOW_MINUTES = 60

DB_CONFIG = db_config_from_env()
DB_CONFIG["database"] = os.getenv("DB_NAME", "hrms_test")

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
