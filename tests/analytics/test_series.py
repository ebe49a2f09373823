from datetime import date, datetime

import pytest

from conftest import TODAY, make_record, make_task

from workforce_analytics.analytics.series import (
    AverageCategory,
    CountCategory,
    attendance_trend,
    build_daily_series,
    build_monthly_series,
    day_label,
    month_label,
    rating_monthly_trend,
    task_monthly_trend,
)
from workforce_analytics.core.enums import AttendanceStatus, TaskStatus
from workforce_analytics.core.exceptions import ValidationError
from workforce_analytics.ratings.model import Rating
from workforce_analytics.tasks.status import annotate_tasks


def test_labels():
    assert day_label(date(2024, 1, 15)) == "Mon 15"
    assert month_label(date(2024, 1, 1)) == "Jan 2024"


def test_daily_window_ends_today_and_emits_every_day():
    series = build_daily_series([], 14, TODAY, [CountCategory("Any", lambda r: r.date)])

    assert len(series.labels) == 14
    assert series.labels[-1] == "Mon 15"
    assert series.labels[0] == "Tue 2"
    assert series.keys[-1] == "2024-01-15"
    assert series.series["Any"] == [0] * 14


def test_attendance_trend_counts_and_infers_absence():
    records = [
        make_record("M001", AttendanceStatus.ON_TIME),
        make_record("M002", AttendanceStatus.PRESENT),
        make_record("M003", AttendanceStatus.LATE),
        make_record("M001", AttendanceStatus.LATE, day=date(2024, 1, 14)),
        # Outside the window.
        make_record("M001", AttendanceStatus.ON_TIME, day=date(2024, 1, 1)),
    ]
    series = attendance_trend(records, total_active=5, days=3, today=TODAY)

    assert series.labels == ["Sat 13", "Sun 14", "Mon 15"]
    assert series.series["Present"] == [0, 0, 2]
    assert series.series["Late"] == [0, 1, 1]
    assert series.series["Absent"] == [5, 4, 2]


def test_monthly_window_spans_year_boundary():
    series = build_monthly_series([], 3, TODAY, [CountCategory("Any", lambda i: i)])
    assert series.labels == ["Nov 2023", "Dec 2023", "Jan 2024"]
    assert series.keys == ["2023-11", "2023-12", "2024-01"]
    assert series.series["Any"] == [0, 0, 0]


def test_task_monthly_trend_falls_back_to_deadline():
    tasks = [
        make_task("T1", created_at=datetime(2023, 12, 20, 10, 0), status=TaskStatus.COMPLETED, completed_on=date(2024, 1, 9)),
        make_task("T2", deadline=date(2024, 1, 20)),
        make_task("T3", created_at=datetime(2023, 6, 1)),
        make_task("T4"),
    ]
    series = task_monthly_trend(annotate_tasks(tasks, TODAY), months=2, today=TODAY)

    assert series.series["Created"] == [1, 1]
    assert series.series["Completed"] == [0, 1]


def test_average_category_leaves_gaps_for_empty_months():
    ratings = [
        Rating(member_id="M001", date=date(2024, 1, 5), quality=8, punctuality=9),
        Rating(member_id="M002", date=date(2024, 1, 20), quality=6),
        Rating(member_id="M001", date=date(2023, 11, 2), quality=7),
    ]
    series = rating_monthly_trend(ratings, months=3, today=TODAY)

    assert series.labels == ["Nov", "Dec", "Jan"]
    values = series.series["Team Average"]
    assert values[0] == pytest.approx(7.0)
    assert values[1] is None
    assert values[2] == pytest.approx(7.25)


def test_rating_trend_for_one_member():
    ratings = [
        Rating(member_id="M001", date=date(2024, 1, 5), quality=8),
        Rating(member_id="M002", date=date(2024, 1, 6), quality=2),
    ]
    series = rating_monthly_trend(ratings, months=1, today=TODAY, member_id="M001", name="M001")
    assert series.series == {"M001": [8.0]}


def test_custom_categories_are_pluggable():
    items = [{"on": "2024-01-15", "kind": "a"}, {"on": "2024-01-15", "kind": "b"}, {"on": None, "kind": "a"}]
    series = build_daily_series(
        items,
        1,
        TODAY,
        [
            CountCategory("A", lambda i: i["on"], lambda i: i["kind"] == "a"),
            AverageCategory("Len", lambda i: i["on"], lambda i: len(i["kind"])),
        ],
    )
    assert series.series == {"A": [1], "Len": [1.0]}


def test_non_positive_window_raises():
    with pytest.raises(ValidationError):
        build_daily_series([], 0, TODAY, [])
    with pytest.raises(ValidationError):
        build_monthly_series([], -1, TODAY, [])
