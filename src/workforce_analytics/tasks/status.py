from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..common.validators import require_iterable
from ..core.constants import UNASSIGNED_MEMBER
from ..core.enums import TaskStatus
from ..members.directory import MemberDirectory
from .model import Task, TaskView


def derive_task_status(task: Task, today: date) -> TaskStatus:
    """Effective status of ``task`` as of ``today``.

    Completed and Cancelled are terminal and returned unchanged. Any other
    task whose deadline is strictly before ``today`` is Overdue. Otherwise the
    stored status is returned (Pending when missing). Must be recomputed on
    every read since ``today`` moves independently of writes.
    """
    stored = task.status or TaskStatus.PENDING
    if stored.is_terminal:
        return stored
    if task.deadline is not None and task.deadline < today:
        return TaskStatus.OVERDUE
    # A stored OVERDUE (legacy rows) re-derives from the deadline.
    if stored == TaskStatus.OVERDUE:
        return TaskStatus.PENDING
    return stored


def annotate_tasks(
    tasks: Iterable[Task],
    today: date,
    directory: Optional[MemberDirectory] = None,
) -> list[TaskView]:
    """Wrap each task in a TaskView carrying derived status and resolved assignee."""
    items = require_iterable(tasks, "tasks")
    directory = directory or MemberDirectory([])
    return [
        TaskView(
            task=t,
            display_status=derive_task_status(t, today),
            assignee_name=directory.name_for(t.member_id, fallback=UNASSIGNED_MEMBER),
            department=directory.department_of(t.member_id),
        )
        for t in items
    ]
