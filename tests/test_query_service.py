from __future__ import annotations

import pytest

from conftest import ALICE, BOB, OWNER
from task_registry.domain.errors import InvalidInput, NotFound, RegistryPaused
from task_registry.domain.task_models import Task, TaskCreate, TaskPriority


def _new(registry, run, who=ALICE, due=100, priority=TaskPriority.low):
    return run(registry.tasks.create_task(who, TaskCreate(description=f"due {due}", due_date=due, priority=priority)))


def test_list_mine_sorts_by_due_date_stably(registry, run):
    for due in (30, 10, 30, 20, 10):
        _new(registry, run, due=due)
    _new(registry, run, who=BOB, due=1)

    page = run(registry.queries.list_mine(ALICE, 0, 10))
    assert page.total == 5
    assert [(t.due_date, t.id) for t in page.items] == [(10, 2), (10, 5), (20, 4), (30, 1), (30, 3)]


def test_pages_concatenate_to_full_list(registry, run):
    dues = [5, 3, 9, 3, 1, 7, 5, 2]
    for due in dues:
        _new(registry, run, due=due)

    full = run(registry.queries.list_mine(ALICE, 0, 100)).items
    collected = []
    page = 0
    while True:
        items = run(registry.queries.list_mine(ALICE, page, 3)).items
        if not items:
            break
        collected.extend(items)
        page += 1

    assert page == 3
    assert collected == full
    assert len({t.id for t in collected}) == len(dues)


def test_list_mine_edge_pages(registry, run):
    _new(registry, run)
    assert run(registry.queries.list_mine(ALICE, 1, 1)).items == []
    assert run(registry.queries.list_mine(ALICE, 0, 0)).items == []
    assert run(registry.queries.list_mine(ALICE, 5, 0)).items == []
    assert run(registry.queries.list_mine(BOB, 0, 10)).total == 0
    with pytest.raises(InvalidInput):
        run(registry.queries.list_mine(ALICE, -1, 10))


def test_get_bounds_and_deleted_slot(registry, run):
    task = _new(registry, run)
    assert run(registry.queries.get_task(task.id)) == task
    with pytest.raises(NotFound):
        run(registry.queries.get_task(0))
    with pytest.raises(NotFound):
        run(registry.queries.get_task(2))

    run(registry.tasks.delete_task(ALICE, task.id))
    assert run(registry.queries.get_task(task.id)) == Task()


def test_filters_skip_deleted_slots(registry, run):
    a = _new(registry, run, priority=TaskPriority.high)
    b = _new(registry, run, priority=TaskPriority.low)
    c = _new(registry, run, who=BOB, priority=TaskPriority.low)
    run(registry.tasks.complete_task(BOB, c.id))
    run(registry.tasks.delete_task(ALICE, b.id))

    assert run(registry.queries.list_by_priority(TaskPriority.low)) == [c.id]
    assert run(registry.queries.list_by_priority(TaskPriority.high)) == [a.id]
    assert run(registry.queries.list_by_priority(TaskPriority.medium)) == []
    assert run(registry.queries.list_by_completion(True)) == [c.id]
    assert run(registry.queries.list_by_completion(False)) == [a.id]
    assert run(registry.queries.count_by_assignee(ALICE)) == 1
    assert run(registry.queries.count_by_assignee("")) == 0


def test_list_all_and_counters(registry, run):
    for _ in range(3):
        _new(registry, run)
    run(registry.tasks.delete_task(ALICE, 2))

    dump = run(registry.queries.list_all())
    assert [t.id for t in dump] == [1, 0, 3]
    assert dump[1] == Task()
    assert run(registry.queries.count()) == 2
    assert run(registry.queries.counter()) == 3


def test_reads_work_while_paused(registry, run):
    _new(registry, run)
    registry.pause.pause(OWNER)

    assert run(registry.queries.is_paused()) is True
    assert run(registry.queries.get_task(1)).assigned_to == ALICE
    assert run(registry.queries.list_mine(ALICE, 0, 10)).total == 1
    assert run(registry.queries.count()) == 1


def test_owner_and_user_scenario(registry, run):
    first = _new(registry, run, due=100, priority=TaskPriority.high)
    second = _new(registry, run, due=50, priority=TaskPriority.low)
    assert (first.id, second.id) == (1, 2)

    mine = run(registry.queries.list_mine(ALICE, 0, 10)).items
    assert [t.id for t in mine] == [2, 1]
    assert run(registry.queries.count_by_assignee(ALICE)) == 2

    registry.pause.pause(OWNER)
    with pytest.raises(RegistryPaused):
        run(registry.tasks.complete_task(ALICE, 1))
    registry.pause.resume(OWNER)
    run(registry.tasks.complete_task(ALICE, 1))
    assert run(registry.queries.get_task(1)).completed is True

    run(registry.tasks.delete_task(ALICE, 2))
    assert run(registry.queries.count()) == 1
    assert run(registry.queries.list_by_priority(TaskPriority.low)) == []
    deleted = run(registry.queries.get_task(2))
    assert (deleted.description, deleted.assigned_to, deleted.due_date) == ("", "", 0)
