"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_REPORT_DAYS = 30
MIN_PASSWORD_LENGTH = 6

MYSQL_DUPLICATE_KEY = 1062

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
LOG_FILE_NAME = "attendance.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3
