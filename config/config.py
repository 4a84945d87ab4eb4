"""Settings shared by every environment module."""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(*, default_password: str = "") -> dict:
    """mysql-connector keyword dict built from DB_* variables."""
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "hrms_db"),
    }


JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", str(24 * 60)))
JWT_REFRESH_WINDOW_MINUTES = int(os.getenv("JWT_REFRESH_WINDOW_MINUTES", str(7 * 24 * 60)))

# six_day_week (Sundays off) or flat_30
PAYROLL_POLICY = os.getenv("PAYROLL_POLICY", "six_day_week")

# Check-ins after this local time are marked late
LATE_AFTER = os.getenv("LATE_AFTER", "10:15")
