from typing import List, Optional

from ..models import Priority, Task, TaskStatus
from ..schemas.task import TaskCreate, TaskFilter, TaskStats, TaskUpdate
from ..store import TaskStore
from . import query as query_engine
from .lifecycle import LifecycleManager
from .stats import get_stats


class TaskService:
    """Operations exposed to transports (HTTP routes, scripts, tests).

    Reads take a snapshot from the store and hand it to the pure query and
    stats functions; writes go through the store or the lifecycle manager.
    """

    def __init__(self, store: TaskStore):
        self.store = store
        self.lifecycle = LifecycleManager(store)

    def create(self, spec: TaskCreate) -> Task:
        return self.store.insert(spec)

    def list_tasks(self, filters: Optional[TaskFilter] = None) -> List[Task]:
        """All tasks in insertion order, or filtered and sorted when ``filters`` is given."""
        tasks = self.store.list()
        if filters is None:
            return tasks
        return query_engine.query(tasks, filters, now=self.store.now())

    def get(self, task_id: str) -> Task:
        return self.store.get(task_id)

    def update(self, task_id: str, patch: TaskUpdate) -> Task:
        return self.store.update(task_id, patch)

    def delete(self, task_id: str) -> None:
        self.store.delete(task_id)

    def find_by_status(self, status: TaskStatus) -> List[Task]:
        return query_engine.find_by_status(self.store.list(), status)

    def find_by_priority(self, priority: Priority) -> List[Task]:
        return query_engine.find_by_priority(self.store.list(), priority)

    def find_overdue(self) -> List[Task]:
        return query_engine.find_overdue(self.store.list(), now=self.store.now())

    def get_stats(self) -> TaskStats:
        return get_stats(self.store.list())

    def mark_completed(self, task_id: str) -> Task:
        return self.lifecycle.mark_completed(task_id)

    def mark_in_progress(self, task_id: str) -> Task:
        return self.lifecycle.mark_in_progress(task_id)

    def mark_pending(self, task_id: str) -> Task:
        return self.lifecycle.mark_pending(task_id)
