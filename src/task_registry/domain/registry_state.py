from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict

from task_registry.domain.task_models import Task


@dataclass
class RegistryState:
    """
    Everything the registry persists: the owner, the pause flag, the two
    counters and the task slots.

    `counter` is the highest id ever assigned and never goes down.
    `live_count` tracks tasks that have not been deleted.
    `lock` serializes every operation that touches this state.
    """

    owner: str
    paused: bool = False
    counter: int = 0
    live_count: int = 0
    slots: Dict[int, Task] = field(default_factory=dict)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.owner or not self.owner.strip():
            raise ValueError("owner is required")
