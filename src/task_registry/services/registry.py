from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from task_registry.domain.registry_state import RegistryState
from task_registry.infra.db.task_repo_memory import InMemoryTaskRepo
from task_registry.services.event_log import EventLog
from task_registry.services.pause_controller import PauseController
from task_registry.services.query_service import TaskQueryService
from task_registry.services.task_service import TaskService, unix_clock


@dataclass
class Registry:
    state: RegistryState
    events: EventLog
    pause: PauseController
    tasks: TaskService
    queries: TaskQueryService


def build_registry(owner: str, clock: Callable[[], int] = unix_clock, event_log_size: int = 10_000) -> Registry:
    state = RegistryState(owner=owner)
    repo = InMemoryTaskRepo(state)
    events = EventLog(maxlen=event_log_size)
    pause = PauseController(state, events)
    return Registry(
        state=state,
        events=events,
        pause=pause,
        tasks=TaskService(repo, pause, events, clock=clock),
        queries=TaskQueryService(repo),
    )
