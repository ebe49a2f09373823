"""Roll-ups for summary cards.

Every rate returned here is an integer percentage in [0, 100] and is 0 when
its denominator is 0.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import date
from typing import Iterable, Optional, Sequence, Union

from ..attendance.absence import DEFAULT_ABSENCE_POLICY, AbsencePolicy
from ..attendance.model import AttendanceRecord, AttendanceSummary
from ..common.validators import require_iterable
from ..core.enums import AttendanceStatus, ScoreBand, TaskStatus
from ..members.directory import MemberDirectory
from ..ratings.model import Rating
from ..tasks.model import Task, TaskView
from ..tasks.status import derive_task_status
from .filters import score_band_of

PRESENT_STATUSES = frozenset({AttendanceStatus.ON_TIME, AttendanceStatus.PRESENT})


def percent(part: float, whole: float) -> int:
    """``round(part / whole * 100)`` with halves rounded up; 0 when ``whole`` is 0."""
    if not whole:
        return 0
    return int(math.floor(part / whole * 100 + 0.5))


def score_value(value) -> float:
    """Numeric score; missing or non-numeric values count as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def _status_of(item: Union[Task, TaskView], today: Optional[date]) -> TaskStatus:
    if isinstance(item, TaskView):
        return item.display_status
    if today is not None:
        return derive_task_status(item, today)
    return item.status


def _task_of(item: Union[Task, TaskView]) -> Task:
    return item.task if isinstance(item, TaskView) else item


@dataclass(frozen=True)
class TaskStatistics:
    total: int
    completed: int
    pending: int
    in_progress: int
    overdue: int
    cancelled: int
    completion_rate: int
    on_time_rate: int
    avg_score: float

    @property
    def avg_score_display(self) -> float:
        return round(self.avg_score, 1)

    def as_dict(self) -> dict:
        data = asdict(self)
        data["avg_score_display"] = self.avg_score_display
        return data


def task_statistics(tasks: Iterable[Union[Task, TaskView]], today: Optional[date] = None) -> TaskStatistics:
    """Counts by derived status plus completion, on-time and score averages.

    ``tasks`` may hold TaskView items (status already derived) or raw Task
    items, which are derived against ``today`` when given.
    """
    items = require_iterable(tasks, "tasks")
    counts = {s: 0 for s in TaskStatus}
    on_time = 0
    qualifying = 0
    score_sum = 0.0
    scored = 0

    for item in items:
        status = _status_of(item, today)
        counts[status] += 1
        if status != TaskStatus.COMPLETED:
            continue

        task = _task_of(item)
        if task.deadline is not None and task.completed_on is not None:
            qualifying += 1
            if task.completed_on <= task.deadline:
                on_time += 1

        score = score_value(task.quality_score)
        if score > 0:
            score_sum += score
            scored += 1

    total = len(items)
    completed = counts[TaskStatus.COMPLETED]
    return TaskStatistics(
        total=total,
        completed=completed,
        pending=counts[TaskStatus.PENDING],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        overdue=counts[TaskStatus.OVERDUE],
        cancelled=counts[TaskStatus.CANCELLED],
        completion_rate=percent(completed, total),
        on_time_rate=percent(on_time, qualifying),
        avg_score=score_sum / scored if scored else 0.0,
    )


def completion_breakdown(tasks: Iterable[Union[Task, TaskView]], today: Optional[date] = None) -> dict[str, int]:
    """Doughnut-chart counts in display order."""
    stats = task_statistics(tasks, today)
    return {
        TaskStatus.COMPLETED.value: stats.completed,
        TaskStatus.IN_PROGRESS.value: stats.in_progress,
        TaskStatus.PENDING.value: stats.pending,
        TaskStatus.OVERDUE.value: stats.overdue,
    }


def attendance_statistics(
    records: Iterable[AttendanceRecord],
    *,
    total_active: int,
    on: Optional[date] = None,
    policy: Optional[AbsencePolicy] = None,
) -> AttendanceSummary:
    """Per-day attendance summary.

    When ``on`` is given only records dated ``on`` are considered; otherwise
    ``records`` is taken to be a single day's sheet. Absence is inferred by
    ``policy`` (absence by omission unless told otherwise).
    """
    items = require_iterable(records, "records")
    if on is not None:
        items = [r for r in items if r.date == on]
    policy = policy or DEFAULT_ABSENCE_POLICY
    total_active = max(int(total_active), 0)

    present = sum(1 for r in items if r.status in PRESENT_STATUSES)
    late = sum(1 for r in items if r.status == AttendanceStatus.LATE)
    return AttendanceSummary(
        total_active=total_active,
        present_count=present,
        late_count=late,
        absent_count=policy.absent_count(total_active=total_active, day_records=items),
        on_leave_count=sum(1 for r in items if r.status == AttendanceStatus.ON_LEAVE),
        half_day_count=sum(1 for r in items if r.status == AttendanceStatus.HALF_DAY),
        # More rows than active members (stale headcount) still caps at 100.
        attendance_rate=min(percent(present + late, total_active), 100),
    )


def average_rating(ratings: Iterable[Rating]) -> float:
    """Flatten-then-average: mean of every populated sub-score across all ratings.

    This is not a mean of per-member means; members with more populated
    sub-scores weigh more.
    """
    items = require_iterable(ratings, "ratings")
    pool = [score for r in items for score in r.sub_scores()]
    return sum(pool) / len(pool) if pool else 0.0


@dataclass(frozen=True)
class RatingSummary:
    count: int
    total_ratings: int
    average: float
    highest: float
    lowest: float
    distribution: dict

    def as_dict(self) -> dict:
        data = asdict(self)
        for key in ("average", "highest", "lowest"):
            data[key] = round(data[key], 1)
        return data


def rating_summary(ratings: Iterable[Rating]) -> RatingSummary:
    """Summary cards over per-rating averages.

    Ratings whose average is 0 are left out of average, highest, lowest and
    the band distribution. When no rating has a positive average everything
    is 0; otherwise ``count`` is the number of distinct members rated and
    ``total_ratings`` the number of ratings given.
    """
    items = require_iterable(ratings, "ratings")
    scores = [s for s in (r.average_score() for r in items) if s > 0]
    distribution = {band.value: 0 for band in (ScoreBand.LOW, ScoreBand.MEDIUM, ScoreBand.HIGH)}
    if not scores:
        return RatingSummary(count=0, total_ratings=0, average=0.0, highest=0.0, lowest=0.0, distribution=distribution)

    for s in scores:
        distribution[score_band_of(s).value] += 1
    return RatingSummary(
        count=len({r.member_id for r in items}),
        total_ratings=len(items),
        average=sum(scores) / len(scores),
        highest=max(scores),
        lowest=min(scores),
        distribution=distribution,
    )


@dataclass(frozen=True)
class DepartmentRatingAverage:
    department: str
    ratings: int
    average: float


def department_rating_averages(ratings: Iterable[Rating], directory: MemberDirectory) -> list[DepartmentRatingAverage]:
    """Mean per-rating average for each department, best first.

    Departments without ratings, or whose mean is 0, are left out.
    """
    items = require_iterable(ratings, "ratings")
    rows = []
    for dept in directory.departments():
        ids = directory.ids_in_department(dept)
        scores = [r.average_score() for r in items if r.member_id in ids]
        avg = sum(scores) / len(scores) if scores else 0.0
        if avg > 0:
            rows.append(DepartmentRatingAverage(department=dept, ratings=len(scores), average=avg))
    rows.sort(key=lambda r: r.average, reverse=True)
    return rows


def tasks_due_on(tasks: Iterable[Union[Task, TaskView]], day: date) -> int:
    """Open (non-terminal) tasks whose deadline is exactly ``day``."""
    items = require_iterable(tasks, "tasks")
    return sum(
        1
        for item in items
        if not _task_of(item).status.is_terminal and _task_of(item).deadline == day
    )


def upcoming_tasks(views: Iterable[TaskView], today: date, *, limit: int) -> list[TaskView]:
    """Open tasks due today or later, soonest first."""
    items = require_iterable(views, "tasks")
    upcoming = [
        v for v in items
        if not v.task.status.is_terminal and v.deadline is not None and v.deadline >= today
    ]
    upcoming.sort(key=lambda v: v.deadline)
    return upcoming[: max(int(limit), 0)]


def latest_checkins(records: Iterable[AttendanceRecord], *, limit: Optional[int] = None) -> list[AttendanceRecord]:
    """Records ordered by punch-in, most recent first; missing punch-ins last."""
    items = require_iterable(records, "records")
    items.sort(key=lambda r: (r.punch_in.hour * 60 + r.punch_in.minute) if r.punch_in else 0, reverse=True)
    return items if limit is None else items[:limit]


@dataclass(frozen=True)
class DepartmentHeadcount:
    department: str
    count: int
    present: int
    share: int
    attendance_rate: int


def department_distribution(
    directory: MemberDirectory,
    day_records: Sequence[AttendanceRecord],
) -> list[DepartmentHeadcount]:
    """Active members per department with the share of headcount and that day's attendance rate.

    Members without a department fall under "Unassigned". Ordered by member
    count, largest first.
    """
    active = directory.active()
    with_record = {r.member_id for r in day_records}
    groups: dict[str, list[int]] = {}
    for m in active:
        g = groups.setdefault(m.department_name, [0, 0])
        g[0] += 1
        if m.member_id in with_record:
            g[1] += 1

    rows = [
        DepartmentHeadcount(
            department=dept,
            count=count,
            present=present,
            share=percent(count, len(active)),
            attendance_rate=percent(present, count),
        )
        for dept, (count, present) in groups.items()
    ]
    rows.sort(key=lambda r: r.count, reverse=True)
    return rows


@dataclass(frozen=True)
class DepartmentProductivity:
    department: str
    total: int
    completed: int
    rate: int


def department_productivity(
    tasks: Iterable[Union[Task, TaskView]],
    directory: MemberDirectory,
    today: Optional[date] = None,
) -> list[DepartmentProductivity]:
    """Task totals and completion rate per department, best rate first."""
    items = require_iterable(tasks, "tasks")
    departments: list[str] = []
    for m in directory:
        if m.department and m.department not in departments:
            departments.append(m.department)

    rows = []
    for dept in departments:
        ids = directory.ids_in_department(dept)
        dept_items = [i for i in items if _task_of(i).member_id in ids]
        completed = sum(1 for i in dept_items if _status_of(i, today) == TaskStatus.COMPLETED)
        rows.append(
            DepartmentProductivity(
                department=dept,
                total=len(dept_items),
                completed=completed,
                rate=percent(completed, len(dept_items)),
            )
        )
    rows.sort(key=lambda r: r.rate, reverse=True)
    return rows
