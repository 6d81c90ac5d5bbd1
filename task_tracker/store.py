"""In-memory task storage.

The store lives as long as the process. It is owned by whoever constructs it
(the FastAPI app keeps one on ``app.state``) and is never a module-level
singleton, so each test can start from an empty store.
"""

import logging
import threading
from datetime import datetime
from typing import Callable, List, Optional
from uuid import uuid4

from .errors import TaskNotFoundError
from .models import Task, TaskStatus, utcnow
from .schemas.task import TaskCreate, TaskUpdate
from .services.lifecycle import resolve_completed_at

logger = logging.getLogger(__name__)


class TaskStore:
    """Ordered, id-keyed collection of tasks.

    Every read and write of the backing list happens under one re-entrant lock,
    so no caller can observe a half-applied mutation. Tasks handed out are
    copies; changing one never touches the stored record.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._tasks: List[Task] = []
        self._lock = threading.RLock()
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def _index_of(self, task_id: str) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise TaskNotFoundError(task_id)

    def insert(self, spec: TaskCreate) -> Task:
        """Build a task from the creation schema and append it."""
        with self._lock:
            now = self.now()
            task_id = str(uuid4())
            while any(existing.id == task_id for existing in self._tasks):
                task_id = str(uuid4())

            task = Task(
                id=task_id,
                title=spec.title,
                description=spec.description,
                status=spec.status,
                priority=spec.priority,
                due_date=spec.due_date,
                completed_at=None,
                created_at=now,
                updated_at=now,
            )
            self._tasks.append(task)
            logger.info("Created task id=%s status=%s", task.id, task.status.value)
            return task.model_copy()

    def get(self, task_id: str) -> Task:
        with self._lock:
            return self._tasks[self._index_of(task_id)].model_copy()

    def list(self) -> List[Task]:
        """Snapshot of all tasks in insertion order."""
        with self._lock:
            return [task.model_copy() for task in self._tasks]

    def apply(self, task_id: str, changes: dict, now: Optional[datetime] = None) -> Task:
        """Atomically assign ``changes`` to a task and refresh ``updated_at``."""
        with self._lock:
            index = self._index_of(task_id)
            stamp = now or self.now()
            updated = self._tasks[index].model_copy(update={**changes, "updated_at": stamp})
            self._tasks[index] = updated
            logger.debug("Updated task id=%s fields=%s", task_id, sorted(changes))
            return updated.model_copy()

    def complete(self, task_id: str) -> Task:
        """Mark a task completed; ``completed_at`` and ``updated_at`` share one timestamp."""
        with self._lock:
            now = self.now()
            return self.apply(
                task_id,
                {"status": TaskStatus.COMPLETED, "completed_at": now},
                now=now,
            )

    def update(self, task_id: str, patch: TaskUpdate) -> Task:
        """Merge the non-null fields of ``patch`` onto an existing task."""
        with self._lock:
            existing = self._tasks[self._index_of(task_id)]
            now = self.now()
            changes = patch.changes()
            changes["completed_at"] = resolve_completed_at(existing, changes.get("status"), now)
            return self.apply(task_id, changes, now=now)

    def delete(self, task_id: str) -> None:
        with self._lock:
            del self._tasks[self._index_of(task_id)]
            logger.info("Deleted task id=%s", task_id)
