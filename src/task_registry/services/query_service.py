from typing import List

from task_registry.domain.errors import InvalidInput, NotFound
from task_registry.domain.task_models import Task, TaskPage, TaskPriority
from task_registry.infra.db.task_repo_memory import InMemoryTaskRepo


class TaskQueryService:
    """Read-only views over the store. Never gated by pause or role."""

    def __init__(self, repo: InMemoryTaskRepo):
        self.repo = repo

    @property
    def state(self):
        return self.repo.state

    async def get_task(self, task_id: int) -> Task:
        with self.state.lock:
            if not self.repo.in_range(task_id):
                raise NotFound(f"task {task_id} not found")
            return self.repo.get(task_id)

    async def list_mine(self, caller: str, page: int = 0, page_size: int = 10) -> TaskPage:
        if page < 0 or page_size < 0:
            raise InvalidInput("page and page_size must be non-negative")
        with self.state.lock:
            mine = [t for t in self.repo.iter_slots() if caller and t.assigned_to == caller]
        # sorted() is stable, so equal due dates keep id order
        mine = sorted(mine, key=lambda t: t.due_date)
        total = len(mine)
        start = page * page_size
        items = mine[start:min(start + page_size, total)] if start < total else []
        return TaskPage(page=page, page_size=page_size, total=total, items=items)

    async def list_by_priority(self, priority: TaskPriority) -> List[int]:
        priority = TaskPriority(priority)
        with self.state.lock:
            return [t.id for t in self.repo.iter_slots() if not t.is_cleared and t.priority == priority]

    async def list_by_completion(self, completed: bool) -> List[int]:
        with self.state.lock:
            return [t.id for t in self.repo.iter_slots() if not t.is_cleared and t.completed == completed]

    async def count_by_assignee(self, principal: str) -> int:
        with self.state.lock:
            return sum(1 for t in self.repo.iter_slots() if not t.is_cleared and t.assigned_to == principal)

    async def list_all(self) -> List[Task]:
        return self.repo.list()

    async def is_paused(self) -> bool:
        return self.state.paused

    async def count(self) -> int:
        return self.state.live_count

    async def counter(self) -> int:
        return self.state.counter
