import os
from pathlib import Path

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

DATA_FILE = os.getenv("DATA_FILE", str(Path(__file__).resolve().parents[1] / "tests" / "data" / "snapshot.json"))

QUALITY_SCORE_SCALE = 100.0

DEFAULT_PER_PAGE = 10
ATTENDANCE_TREND_DAYS = 14
TASK_TREND_MONTHS = 6
UPCOMING_TASKS_LIMIT = 5
