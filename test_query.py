#!/usr/bin/env python3
"""
Tests for filtering, search and sorting
"""
from datetime import timedelta

import pytest

from task_tracker.models import Priority, TaskStatus
from task_tracker.schemas.task import SortField, SortOrder, TaskCreate, TaskFilter, TaskUpdate
from task_tracker.services.query import find_overdue, matches_search, query, sort_tasks


@pytest.fixture()
def scenario(service, clock):
    """A: low priority, due yesterday. B: high priority, no due date."""
    yesterday = clock.peek() - timedelta(days=1)
    a = service.create(TaskCreate(title="A", priority=Priority.LOW, due_date=yesterday))
    b = service.create(TaskCreate(title="B", priority=Priority.HIGH))
    return a, b


def test_find_overdue_scenario(service, scenario):
    a, _ = scenario
    assert [task.id for task in service.find_overdue()] == [a.id]


def test_stats_scenario(service, scenario):
    stats = service.get_stats()
    assert stats.total == 2
    assert stats.pending == 2
    assert stats.completion_rate == 0


def test_priority_desc_scenario(scenario):
    a, b = scenario
    ordered = sort_tasks([a, b], SortField.PRIORITY, SortOrder.DESC)
    assert [task.id for task in ordered] == [b.id, a.id]


def test_overdue_excludes_completed_and_undated(service, clock):
    past = clock.peek() - timedelta(hours=2)
    future = clock.peek() + timedelta(days=3)
    late = service.create(TaskCreate(title="late", due_date=past))
    done = service.create(TaskCreate(title="done late", due_date=past))
    service.mark_completed(done.id)
    service.create(TaskCreate(title="not due yet", due_date=future))
    service.create(TaskCreate(title="no due date"))

    result = service.list_tasks(TaskFilter(is_overdue=True))

    assert [task.id for task in result] == [late.id]
    assert all(task.due_date is not None for task in result)
    assert all(task.status != TaskStatus.COMPLETED for task in result)


def test_find_overdue_uses_given_now(service, clock):
    due = clock.peek() + timedelta(days=1)
    task = service.create(TaskCreate(title="tomorrow", due_date=due))
    tasks = service.list_tasks()

    assert find_overdue(tasks, now=due - timedelta(seconds=1)) == []
    assert [t.id for t in find_overdue(tasks, now=due + timedelta(seconds=1))] == [task.id]


def test_filters_are_and_combined(service):
    match = service.create(TaskCreate(title="Fix login bug", priority=Priority.HIGH))
    service.create(TaskCreate(title="Fix typo", priority=Priority.LOW))
    other = service.create(TaskCreate(title="Write docs", priority=Priority.HIGH))
    service.mark_in_progress(other.id)

    result = service.list_tasks(
        TaskFilter(status=TaskStatus.PENDING, priority=Priority.HIGH, search="fix")
    )

    assert [task.id for task in result] == [match.id]


def test_search_is_case_insensitive_on_title_or_description(service):
    by_title = service.create(TaskCreate(title="Quarterly REPORT"))
    by_description = service.create(TaskCreate(title="Numbers", description="feeds the report"))
    service.create(TaskCreate(title="Unrelated"))

    result = service.list_tasks(TaskFilter(search="Report", sort_order=SortOrder.ASC))

    assert [task.id for task in result] == [by_title.id, by_description.id]


def test_search_ignores_missing_description(service):
    task = service.create(TaskCreate(title="Title only"))
    assert not matches_search(task, "none")
    assert matches_search(task, "ONLY")


def test_default_sort_is_created_at_desc(service):
    first = service.create(TaskCreate(title="first"))
    second = service.create(TaskCreate(title="second"))
    third = service.create(TaskCreate(title="third"))

    result = service.list_tasks(TaskFilter())

    assert [task.id for task in result] == [third.id, second.id, first.id]


def test_list_without_filter_keeps_insertion_order(service):
    first = service.create(TaskCreate(title="first"))
    second = service.create(TaskCreate(title="second"))
    assert [task.id for task in service.list_tasks()] == [first.id, second.id]


def test_sort_by_updated_at(service):
    older = service.create(TaskCreate(title="older"))
    newer = service.create(TaskCreate(title="newer"))
    service.update(older.id, TaskUpdate(description="touched"))

    result = service.list_tasks(TaskFilter(sort_by=SortField.UPDATED_AT, sort_order=SortOrder.ASC))

    assert [task.id for task in result] == [newer.id, older.id]


@pytest.mark.parametrize("order", [SortOrder.ASC, SortOrder.DESC])
def test_missing_due_date_sorts_last_in_both_directions(service, clock, order):
    base = clock.peek()
    undated_one = service.create(TaskCreate(title="undated one"))
    early = service.create(TaskCreate(title="early", due_date=base + timedelta(days=1)))
    undated_two = service.create(TaskCreate(title="undated two"))
    late = service.create(TaskCreate(title="late", due_date=base + timedelta(days=5)))

    result = query(service.list_tasks(), TaskFilter(sort_by=SortField.DUE_DATE, sort_order=order))
    ids = [task.id for task in result]

    dated = [early.id, late.id] if order == SortOrder.ASC else [late.id, early.id]
    assert ids[:2] == dated
    assert set(ids[2:]) == {undated_one.id, undated_two.id}


def test_sort_by_priority_ascending(service):
    high = service.create(TaskCreate(title="h", priority=Priority.HIGH))
    low = service.create(TaskCreate(title="l", priority=Priority.LOW))
    medium = service.create(TaskCreate(title="m"))

    result = service.list_tasks(TaskFilter(sort_by=SortField.PRIORITY, sort_order=SortOrder.ASC))

    assert [task.id for task in result] == [low.id, medium.id, high.id]


def test_sort_by_title_ignores_case(service):
    service.create(TaskCreate(title="cherry"))
    service.create(TaskCreate(title="Banana"))
    service.create(TaskCreate(title="apple"))

    asc = service.list_tasks(TaskFilter(sort_by=SortField.TITLE, sort_order=SortOrder.ASC))
    desc = service.list_tasks(TaskFilter(sort_by=SortField.TITLE, sort_order=SortOrder.DESC))

    assert [task.title for task in asc] == ["apple", "Banana", "cherry"]
    assert [task.title for task in desc] == ["cherry", "Banana", "apple"]


def test_find_by_status_and_priority(service):
    low = service.create(TaskCreate(title="low", priority=Priority.LOW))
    high = service.create(TaskCreate(title="high", priority=Priority.HIGH))
    service.mark_completed(high.id)

    assert [task.id for task in service.find_by_priority(Priority.LOW)] == [low.id]
    assert [task.id for task in service.find_by_status(TaskStatus.COMPLETED)] == [high.id]
    assert service.find_by_status(TaskStatus.IN_PROGRESS) == []


def test_filter_rejects_out_of_range_search():
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        TaskFilter(search="")
    with pytest.raises(ValidationError):
        TaskFilter(search="s" * 101)


def test_sort_by_title_collates_accented_letters(service):
    service.create(TaskCreate(title="zebra"))
    service.create(TaskCreate(title="Éclair"))
    service.create(TaskCreate(title="apple"))
    service.create(TaskCreate(title="eclair"))

    asc = service.list_tasks(TaskFilter(sort_by=SortField.TITLE, sort_order=SortOrder.ASC))
    titles = [task.title for task in asc]

    assert titles[0] == "apple"
    assert titles[-1] == "zebra"
    assert set(titles[1:3]) == {"Éclair", "eclair"}
