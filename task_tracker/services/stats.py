import math
from typing import Iterable

from ..models import Task, TaskStatus
from ..schemas.task import TaskStats


def completion_rate(completed: int, total: int) -> int:
    """Whole-number percentage, halves rounded up; 0 for an empty store."""
    if total == 0:
        return 0
    return math.floor(completed / total * 100 + 0.5)


def get_stats(tasks: Iterable[Task]) -> TaskStats:
    counts = {status: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status] += 1

    total = sum(counts.values())
    completed = counts[TaskStatus.COMPLETED]
    return TaskStats(
        total=total,
        completed=completed,
        pending=counts[TaskStatus.PENDING],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        completion_rate=completion_rate(completed, total),
    )
