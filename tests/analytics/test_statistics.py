from datetime import date, time

import pytest

from conftest import TODAY, make_members, make_record, make_task

from workforce_analytics.analytics.statistics import (
    attendance_statistics,
    average_rating,
    completion_breakdown,
    department_distribution,
    department_productivity,
    latest_checkins,
    percent,
    task_statistics,
    tasks_due_on,
    upcoming_tasks,
)
from workforce_analytics.attendance.absence import ExplicitAbsencePolicy
from workforce_analytics.core.enums import AttendanceStatus, MemberStatus, TaskStatus
from workforce_analytics.core.exceptions import ValidationError
from workforce_analytics.members.directory import MemberDirectory
from workforce_analytics.members.model import Member
from workforce_analytics.ratings.model import Rating
from workforce_analytics.tasks.status import annotate_tasks


def test_percent_rounds_half_up_and_handles_zero():
    assert percent(1, 8) == 13
    assert percent(1, 3) == 33
    assert percent(5, 0) == 0


def test_attendance_summary_for_ten_members():
    records = [make_record(f"M{i:03d}", AttendanceStatus.ON_TIME) for i in range(1, 8)]
    records.append(make_record("M008", AttendanceStatus.LATE))

    summary = attendance_statistics(records, total_active=10)

    assert summary.present_count == 7
    assert summary.late_count == 1
    assert summary.absent_count == 2
    assert summary.attendance_rate == 80


def test_absent_count_is_active_minus_records():
    records = [
        make_record("M001", AttendanceStatus.PRESENT),
        make_record("M002", AttendanceStatus.ON_LEAVE),
        make_record("M003", AttendanceStatus.HALF_DAY),
    ]
    summary = attendance_statistics(records, total_active=5)

    assert summary.absent_count == max(0, summary.total_active - len(records))
    assert summary.on_leave_count == 1
    assert summary.half_day_count == 1


_NON_ABSENT_CYCLE = (
    AttendanceStatus.ON_TIME,
    AttendanceStatus.PRESENT,
    AttendanceStatus.LATE,
    AttendanceStatus.ON_LEAVE,
    AttendanceStatus.HALF_DAY,
)


@pytest.mark.parametrize("recorded", range(0, 7))
def test_counts_add_up_to_active_headcount(recorded):
    records = [
        make_record(f"M{i:03d}", _NON_ABSENT_CYCLE[i % len(_NON_ABSENT_CYCLE)]) for i in range(1, recorded + 1)
    ]
    summary = attendance_statistics(records, total_active=6)

    assert summary.absent_count == 6 - recorded
    assert (
        summary.present_count
        + summary.late_count
        + summary.on_leave_count
        + summary.half_day_count
        + summary.absent_count
    ) == summary.total_active


def test_attendance_absence_never_negative():
    records = [make_record(f"M{i:03d}", AttendanceStatus.ON_TIME) for i in range(1, 6)]
    summary = attendance_statistics(records, total_active=3)

    assert summary.absent_count == 0
    assert summary.attendance_rate == 100


def test_attendance_with_no_active_members_is_zero_rate():
    summary = attendance_statistics([], total_active=0)
    assert summary.attendance_rate == 0
    assert summary.absent_count == 0


def test_attendance_only_counts_reference_day():
    records = [
        make_record("M001", AttendanceStatus.ON_TIME),
        make_record("M002", AttendanceStatus.ON_TIME, day=date(2024, 1, 14)),
    ]
    summary = attendance_statistics(records, total_active=2, on=TODAY)

    assert summary.present_count == 1
    assert summary.absent_count == 1


def test_explicit_absence_policy_counts_absent_rows_only():
    records = [make_record("M001", AttendanceStatus.ABSENT), make_record("M002", AttendanceStatus.ON_TIME)]
    summary = attendance_statistics(records, total_active=10, policy=ExplicitAbsencePolicy())
    assert summary.absent_count == 1


def test_task_statistics_over_derived_statuses():
    tasks = [
        make_task("T1", status=TaskStatus.COMPLETED, deadline=date(2024, 1, 10), completed_on=date(2024, 1, 9), quality_score=90),
        make_task("T2", status=TaskStatus.COMPLETED, deadline=date(2024, 1, 5), completed_on=date(2024, 1, 8), quality_score=70),
        make_task("T3", status=TaskStatus.COMPLETED, quality_score=0),
        make_task("T4", status=TaskStatus.PENDING, deadline=date(2024, 1, 10), quality_score=100),
        make_task("T5", status=TaskStatus.IN_PROGRESS, deadline=date(2024, 2, 1)),
    ]
    stats = task_statistics(annotate_tasks(tasks, TODAY))

    assert stats.total == 5
    assert stats.completed == 3
    assert stats.overdue == 1
    assert stats.pending == 0
    assert stats.in_progress == 1
    assert stats.completion_rate == 60
    # T3 has no dates so it does not qualify for on-time.
    assert stats.on_time_rate == 50
    # Only positive scores of completed tasks count.
    assert stats.avg_score == pytest.approx(80.0)
    assert stats.avg_score_display == 80.0


def test_task_statistics_on_empty_collection_is_all_zero():
    stats = task_statistics([])
    assert stats.total == 0
    assert stats.completion_rate == 0
    assert stats.on_time_rate == 0
    assert stats.avg_score == 0.0


def test_task_statistics_derives_raw_tasks_when_today_given():
    tasks = [make_task("T1", deadline=date(2024, 1, 1))]
    assert task_statistics(tasks, TODAY).overdue == 1
    assert task_statistics(tasks).pending == 1


def test_task_statistics_rejects_non_collections():
    with pytest.raises(ValidationError):
        task_statistics(None)
    with pytest.raises(ValidationError):
        task_statistics("tasks")


def test_completion_breakdown_order():
    views = annotate_tasks(
        [
            make_task("T1", status=TaskStatus.COMPLETED),
            make_task("T2", deadline=date(2024, 1, 1)),
            make_task("T3", status=TaskStatus.IN_PROGRESS),
        ],
        TODAY,
    )
    assert list(completion_breakdown(views).items()) == [
        ("Completed", 1),
        ("In Progress", 1),
        ("Pending", 0),
        ("Overdue", 1),
    ]


def test_average_rating_flattens_sub_scores():
    ratings = [
        Rating(member_id="M001", quality=8, punctuality=8, reliability=8, deadlines=8),
        Rating(member_id="M002", quality=4),
    ]
    # (32 + 4) / 5, not the mean of the two per-rating averages (6.0).
    assert average_rating(ratings) == pytest.approx(7.2)


def test_zero_sub_score_counts_in_team_average_only():
    rating = Rating(member_id="M001", quality=9, punctuality=9, reliability=9, deadlines=0)

    assert rating.average_score() == pytest.approx(9.0)
    assert average_rating([rating]) == pytest.approx(6.75)


def test_average_rating_ignores_empty_sub_scores():
    assert average_rating([Rating(member_id="M001")]) == 0.0
    assert average_rating([]) == 0.0


def test_tasks_due_today_skips_terminal_tasks():
    tasks = [
        make_task("T1", deadline=TODAY),
        make_task("T2", deadline=TODAY, status=TaskStatus.COMPLETED),
        make_task("T3", deadline=date(2024, 1, 16)),
    ]
    assert tasks_due_on(tasks, TODAY) == 1


def test_upcoming_tasks_sorted_and_limited():
    tasks = [make_task(f"T{i}", deadline=date(2024, 1, 15 + i)) for i in range(6, 0, -1)]
    tasks.append(make_task("OLD", deadline=date(2024, 1, 1)))
    tasks.append(make_task("DONE", deadline=date(2024, 1, 16), status=TaskStatus.COMPLETED))

    result = upcoming_tasks(annotate_tasks(tasks, TODAY), TODAY, limit=5)

    assert [v.task_id for v in result] == ["T1", "T2", "T3", "T4", "T5"]


def test_latest_checkins_most_recent_first():
    records = [
        make_record("M001", AttendanceStatus.ON_TIME, punch_in=time(8, 50)),
        make_record("M002", AttendanceStatus.LATE, punch_in=time(9, 30)),
        make_record("M003", AttendanceStatus.ON_LEAVE),
        make_record("M004", AttendanceStatus.ON_TIME, punch_in=time(9, 0)),
    ]
    assert [r.member_id for r in latest_checkins(records)] == ["M002", "M004", "M001", "M003"]
    assert len(latest_checkins(records, limit=2)) == 2


def test_department_distribution():
    members = [
        Member(member_id="A", name="A", department="Engineering"),
        Member(member_id="B", name="B", department="Engineering"),
        Member(member_id="C", name="C", department="Sales"),
        Member(member_id="D", name="D"),
        Member(member_id="E", name="E", department="Sales", status=MemberStatus.TERMINATED),
    ]
    rows = department_distribution(MemberDirectory(members), [make_record("A", AttendanceStatus.ON_TIME)])

    assert [(r.department, r.count, r.present) for r in rows] == [
        ("Engineering", 2, 1),
        ("Sales", 1, 0),
        ("Unassigned", 1, 0),
    ]
    assert rows[0].share == 50
    assert rows[0].attendance_rate == 50


def test_department_productivity_sorted_by_rate():
    members = make_members(2, department="Engineering") + [Member(member_id="S1", name="S", department="Sales")]
    tasks = [
        make_task("T1", member_id="M001", status=TaskStatus.COMPLETED),
        make_task("T2", member_id="M002"),
        make_task("T3", member_id="S1", status=TaskStatus.COMPLETED),
    ]
    rows = department_productivity(annotate_tasks(tasks, TODAY), MemberDirectory(members))

    assert [(r.department, r.total, r.completed, r.rate) for r in rows] == [
        ("Sales", 1, 1, 100),
        ("Engineering", 2, 1, 50),
    ]
