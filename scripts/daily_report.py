"""Print the dashboard figures for one day as JSON.

Usage: python scripts/daily_report.py [YYYY-MM-DD]
"""

from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from dotenv import load_dotenv

from config import get_settings_module

from workforce_analytics.common.datetime_utils import parse_iso_date, today_local
from workforce_analytics.container import build_container


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        data_file=settings.DATA_FILE,
        score_scale=float(settings.QUALITY_SCORE_SCALE),
        trend_days=int(settings.ATTENDANCE_TREND_DAYS),
        upcoming_limit=int(settings.UPCOMING_TASKS_LIMIT),
    )

    day = parse_iso_date(sys.argv[1]) if len(sys.argv) > 1 else today_local()
    data = container.dashboard_service.build(day)
    print(json.dumps(data.as_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
