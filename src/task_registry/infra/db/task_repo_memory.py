from __future__ import annotations
from typing import Iterator, List

from task_registry.domain.registry_state import RegistryState
from task_registry.domain.task_models import Task, TaskCreate

class InMemoryTaskRepo:
    """
    Authoritative slot store over a RegistryState.

    Ids come from `state.counter`, which only ever grows. A deleted slot is
    reset to a default Task and stays addressable by its old id.
    Callers are expected to hold `state.lock` around read-modify-write
    sequences; the repo itself does no authorization.
    """
    def __init__(self, state: RegistryState):
        self.state = state

    def in_range(self, task_id: int) -> bool:
        return 1 <= task_id <= self.state.counter

    def is_live(self, task_id: int) -> bool:
        return self.in_range(task_id) and not self.get(task_id).is_cleared

    def create(self, data: TaskCreate, *, assigned_to: str, created_at: int) -> Task:
        with self.state.lock:
            task_id = self.state.counter + 1
            task = Task(
                id=task_id,
                description=data.description,
                assigned_to=assigned_to,
                completed=False,
                due_date=data.due_date,
                priority=data.priority,
                created_at=created_at,
            )
            self.state.slots[task_id] = task
            self.state.counter = task_id
            self.state.live_count += 1
            return task

    def get(self, task_id: int) -> Task:
        return self.state.slots.get(task_id, Task())

    def update(self, task_id: int, **fields) -> Task:
        with self.state.lock:
            task = self.get(task_id).model_copy(update=fields)
            self.state.slots[task_id] = task
            return task

    def clear(self, task_id: int) -> None:
        with self.state.lock:
            self.state.slots[task_id] = Task()
            self.state.live_count -= 1

    def iter_slots(self) -> Iterator[Task]:
        # ascending id order, cleared slots included
        for task_id in range(1, self.state.counter + 1):
            yield self.get(task_id)

    def list(self) -> List[Task]:
        with self.state.lock:
            return list(self.iter_slots())
