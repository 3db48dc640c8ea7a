import logging
import time
from typing import Callable

from task_registry.domain import policy
from task_registry.domain.errors import AlreadyCompleted, InvalidInput, NotFound
from task_registry.domain.events import TaskCompleted, TaskCreated, TaskDeleted, TaskReassigned, TaskUpdated
from task_registry.domain.policy import Operation
from task_registry.domain.task_models import Task, TaskCreate, TaskPriority
from task_registry.infra.db.task_repo_memory import InMemoryTaskRepo
from task_registry.services.event_log import EventLog
from task_registry.services.pause_controller import PauseController

logger = logging.getLogger("registry.tasks")


def unix_clock() -> int:
    return int(time.time())


class TaskService:
    """
    Mutating task operations.

    Each call runs under the registry lock and checks, in order: pause
    state, identifier, role, then task state. Nothing is written until every
    check has passed.
    """

    def __init__(
        self,
        repo: InMemoryTaskRepo,
        pause: PauseController,
        events: EventLog,
        clock: Callable[[], int] = unix_clock,
    ):
        self.repo = repo
        self.pause = pause
        self.events = events
        self.clock = clock

    @property
    def state(self):
        return self.repo.state

    def _live_task(self, task_id: int) -> Task:
        if not self.repo.is_live(task_id):
            raise NotFound(f"task {task_id} not found")
        return self.repo.get(task_id)

    def _assigned_task(self, caller: str, task_id: int, operation: Operation) -> Task:
        self.pause.require_active()
        task = self._live_task(task_id)
        policy.require(caller, operation, owner=self.state.owner, task=task)
        return task

    async def create_task(self, caller: str, data: TaskCreate) -> Task:
        with self.state.lock:
            self.pause.require_active()
            policy.require(caller, Operation.create, owner=self.state.owner)
            task = self.repo.create(data, assigned_to=caller, created_at=self.clock())
            self.events.emit(
                TaskCreated(
                    task_id=task.id,
                    description=task.description,
                    assigned_to=task.assigned_to,
                    due_date=task.due_date,
                    priority=task.priority,
                    created_at=task.created_at,
                )
            )
        logger.info("task.create", extra={"category": "tasks", "event": "task.create", "task_id": task.id, "principal": caller})
        return task

    async def complete_task(self, caller: str, task_id: int) -> Task:
        with self.state.lock:
            task = self._assigned_task(caller, task_id, Operation.complete)
            if task.completed:
                raise AlreadyCompleted(f"task {task_id} is already completed")
            task = self.repo.update(task_id, completed=True)
            self.events.emit(TaskCompleted(task_id=task_id, assigned_to=caller))
        logger.info("task.complete", extra={"category": "tasks", "event": "task.complete", "task_id": task_id, "principal": caller})
        return task

    async def delete_task(self, caller: str, task_id: int) -> None:
        with self.state.lock:
            self._assigned_task(caller, task_id, Operation.delete)
            self.repo.clear(task_id)
            self.events.emit(TaskDeleted(task_id=task_id, deleted_by=caller))
        logger.info("task.delete", extra={"category": "tasks", "event": "task.delete", "task_id": task_id, "principal": caller})

    async def owner_delete_task(self, caller: str, task_id: int) -> None:
        with self.state.lock:
            self.pause.require_active()
            policy.require(caller, Operation.owner_delete, owner=self.state.owner)
            self._live_task(task_id)
            self.repo.clear(task_id)
            self.events.emit(TaskDeleted(task_id=task_id, deleted_by=caller))
        logger.info("task.owner_delete", extra={"category": "tasks", "event": "task.owner_delete", "task_id": task_id, "principal": caller})

    async def reassign_task(self, caller: str, task_id: int, new_assignee: str) -> Task:
        # principals are stored stripped, the same way get_caller resolves them
        new_assignee = (new_assignee or "").strip()
        with self.state.lock:
            old = self._assigned_task(caller, task_id, Operation.reassign)
            if not new_assignee:
                raise InvalidInput("new_assignee is required")
            task = self.repo.update(task_id, assigned_to=new_assignee)
            self.events.emit(TaskReassigned(task_id=task_id, old_assignee=old.assigned_to, new_assignee=new_assignee))
        logger.info(
            "task.reassign",
            extra={"category": "tasks", "event": "task.reassign", "task_id": task_id, "principal": caller, "new_assignee": new_assignee},
        )
        return task

    async def update_description(self, caller: str, task_id: int, description: str) -> Task:
        return self._update(caller, task_id, description=description)

    async def update_due_date(self, caller: str, task_id: int, due_date: int) -> Task:
        return self._update(caller, task_id, due_date=due_date)

    async def update_priority(self, caller: str, task_id: int, priority: TaskPriority) -> Task:
        return self._update(caller, task_id, priority=TaskPriority(priority))

    def _update(self, caller: str, task_id: int, **fields) -> Task:
        with self.state.lock:
            self._assigned_task(caller, task_id, Operation.update)
            task = self.repo.update(task_id, **fields)
            self.events.emit(
                TaskUpdated(
                    task_id=task_id,
                    description=task.description,
                    due_date=task.due_date,
                    priority=task.priority,
                )
            )
        logger.info(
            "task.update",
            extra={"category": "tasks", "event": "task.update", "task_id": task_id, "principal": caller, "fields": sorted(fields)},
        )
        return task
