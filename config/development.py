import os

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# JSON export of the backing sheets (members, attendance, tasks, ratings, settings)
DATA_FILE = os.getenv("DATA_FILE", "data/snapshot.json")

# Scale of raw task quality scores in the snapshot (converted to 0-100)
QUALITY_SCORE_SCALE = float(os.getenv("QUALITY_SCORE_SCALE", "100"))

DEFAULT_PER_PAGE = int(os.getenv("DEFAULT_PER_PAGE", "10"))
ATTENDANCE_TREND_DAYS = int(os.getenv("ATTENDANCE_TREND_DAYS", "14"))
TASK_TREND_MONTHS = int(os.getenv("TASK_TREND_MONTHS", "6"))
UPCOMING_TASKS_LIMIT = int(os.getenv("UPCOMING_TASKS_LIMIT", "5"))
