"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PER_PAGE = 10
DEFAULT_ATTENDANCE_TREND_DAYS = 14
DEFAULT_TASK_TREND_MONTHS = 6
DEFAULT_UPCOMING_TASKS_LIMIT = 5

DEFAULT_START_TIME = "09:00"
DEFAULT_LATE_GRACE_MINUTES = 0
DEFAULT_WORKING_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri")

QUALITY_SCORE_MAX = 100

UNASSIGNED_DEPARTMENT = "Unassigned"
UNKNOWN_MEMBER = "Unknown"
UNASSIGNED_MEMBER = "Unassigned"

# Rating score bands (per-rating average).
RATING_HIGH_THRESHOLD = 8
RATING_MEDIUM_THRESHOLD = 5
