"""Filtering, search and sorting over a sequence of tasks.

Everything here is a pure function of its inputs: callers pass a snapshot from
the store and get a new list back.
"""

from datetime import datetime
from functools import cmp_to_key, lru_cache
from typing import Iterable, List, Optional

import pyuca

from ..models import PRIORITY_ORDER, Priority, Task, TaskStatus, utcnow
from ..schemas.task import SortField, SortOrder, TaskFilter


@lru_cache(maxsize=None)
def _title_collator() -> pyuca.Collator:
    # Parses the DUCET table; built once on first use.
    return pyuca.Collator()


def _sign(value) -> int:
    return (value > 0) - (value < 0)


def _compare_instants(a: datetime, b: datetime) -> int:
    return _sign((a - b).total_seconds())


def _compare_titles(a: str, b: str) -> int:
    collator = _title_collator()
    key_a, key_b = collator.sort_key(a), collator.sort_key(b)
    if key_a != key_b:
        return (key_a > key_b) - (key_a < key_b)
    return (a > b) - (a < b)


def matches_search(task: Task, term: str) -> bool:
    """Case-insensitive substring match on title or description."""
    needle = term.casefold()
    if needle in task.title.casefold():
        return True
    return task.description is not None and needle in task.description.casefold()


def matches(task: Task, filters: TaskFilter, now: datetime) -> bool:
    if filters.status is not None and task.status != filters.status:
        return False
    if filters.priority is not None and task.priority != filters.priority:
        return False
    if filters.search and not matches_search(task, filters.search):
        return False
    if filters.is_overdue and not task.is_overdue(now):
        return False
    return True


def compare(a: Task, b: Task, sort_by: SortField, sort_order: SortOrder) -> int:
    """Three-way comparison of two tasks for the given sort settings.

    Tasks without a due date sort after dated ones in both directions.
    """
    if sort_by == SortField.DUE_DATE:
        if a.due_date is None or b.due_date is None:
            return (a.due_date is None) - (b.due_date is None)
        result = _compare_instants(a.due_date, b.due_date)
    elif sort_by == SortField.UPDATED_AT:
        result = _compare_instants(a.updated_at, b.updated_at)
    elif sort_by == SortField.PRIORITY:
        result = _sign(PRIORITY_ORDER[a.priority] - PRIORITY_ORDER[b.priority])
    elif sort_by == SortField.TITLE:
        result = _compare_titles(a.title, b.title)
    else:
        result = _compare_instants(a.created_at, b.created_at)

    return result if sort_order == SortOrder.ASC else -result


def sort_tasks(
    tasks: Iterable[Task],
    sort_by: SortField = SortField.CREATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
) -> List[Task]:
    key = cmp_to_key(lambda a, b: compare(a, b, sort_by, sort_order))
    return sorted(tasks, key=key)


def query(
    tasks: Iterable[Task],
    filters: Optional[TaskFilter] = None,
    now: Optional[datetime] = None,
) -> List[Task]:
    """Apply ``filters`` to ``tasks`` and return them sorted."""
    filters = filters or TaskFilter()
    now = now or utcnow()
    selected = [task for task in tasks if matches(task, filters, now)]
    return sort_tasks(selected, filters.sort_by, filters.sort_order)


def find_by_status(tasks: Iterable[Task], status: TaskStatus) -> List[Task]:
    return [task for task in tasks if task.status == status]


def find_by_priority(tasks: Iterable[Task], priority: Priority) -> List[Task]:
    return [task for task in tasks if task.priority == priority]


def find_overdue(tasks: Iterable[Task], now: Optional[datetime] = None) -> List[Task]:
    """Overdue tasks in insertion order."""
    now = now or utcnow()
    return [task for task in tasks if task.is_overdue(now)]
