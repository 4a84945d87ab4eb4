"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_MINUTES = 60 * 24
DEFAULT_REFRESH_WINDOW_MINUTES = 60 * 24 * 7
DEFAULT_LATE_AFTER = "10:15"

FLAT_MONTH_DAYS = 30
REST_WEEKDAY = 6  # date.weekday(): Monday=0 .. Sunday=6
DEFAULT_LOCATION = "Office"
