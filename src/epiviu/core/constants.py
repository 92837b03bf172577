"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

DEFAULT_STAFF_PASSWORD = "1234"
MIN_PASSWORD_LENGTH = 4
DEFAULT_TOKEN_MAX_AGE_SECONDS = 12 * 60 * 60
TOKEN_SALT = "epiviu-session"

# MySQL server error codes surfaced through IntegrityError.errno
ER_DUP_ENTRY = 1062
ER_ROW_IS_REFERENCED = 1451
ER_NO_REFERENCED_ROW = 1452
