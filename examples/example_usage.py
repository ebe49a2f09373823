"""Ví dụ: dùng engine trực tiếp (không qua Flask).

Filter -> sort -> paginate trên danh sách task, rồi in thẻ tổng hợp.
"""

import importlib
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from workforce_analytics.analytics.filters import TaskFilters
from workforce_analytics.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(data_file=settings.DATA_FILE)
    service = container.performance_service

    state = service.default_state().with_filters(TaskFilters(department="Engineering")).with_sort("deadline")
    table = service.task_table(date(2024, 1, 15), state)

    print(table.page.summary())
    for view in table.page.items:
        print(f"{view.task_id:<6} {view.title:<24} {view.display_status.value:<12} {view.assignee_name}")
    print("completion rate:", table.summary.completion_rate, "%")


if __name__ == "__main__":
    main()
