"""Task status transitions and the timestamps they drive.

Any status may move to any other. Completing a task stamps ``completed_at``;
leaving Completed keeps the last completion time.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from ..models import Task, TaskStatus
from ..schemas.task import TaskUpdate

if TYPE_CHECKING:
    from ..store import TaskStore


def resolve_completed_at(
    existing: Task, target_status: Optional[TaskStatus], now: datetime
) -> Optional[datetime]:
    """Completion time after moving ``existing`` to ``target_status``.

    Only a move into Completed from another status stamps ``now``; every other
    case keeps whatever the task already had.
    """
    if target_status == TaskStatus.COMPLETED and existing.status != TaskStatus.COMPLETED:
        return now
    return existing.completed_at


class LifecycleManager:
    """Status shortcuts over a :class:`TaskStore`."""

    def __init__(self, store: TaskStore):
        self.store = store

    def mark_completed(self, task_id: str) -> Task:
        # Refreshes completed_at even when the task is already completed.
        return self.store.complete(task_id)

    def mark_in_progress(self, task_id: str) -> Task:
        return self.store.update(task_id, TaskUpdate(status=TaskStatus.IN_PROGRESS))

    def mark_pending(self, task_id: str) -> Task:
        return self.store.update(task_id, TaskUpdate(status=TaskStatus.PENDING))
