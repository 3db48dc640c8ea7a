from __future__ import annotations

import logging

from task_registry.domain import policy
from task_registry.domain.errors import InvalidState, RegistryPaused
from task_registry.domain.events import ContractPaused, ContractResumed
from task_registry.domain.policy import Operation
from task_registry.domain.registry_state import RegistryState
from task_registry.services.event_log import EventLog

logger = logging.getLogger("registry.system")


class PauseController:
    """Active/Paused switch. Only the owner may flip it."""

    def __init__(self, state: RegistryState, events: EventLog):
        self.state = state
        self.events = events

    def is_paused(self) -> bool:
        return self.state.paused

    def require_active(self) -> None:
        if self.state.paused:
            raise RegistryPaused("registry is paused")

    def pause(self, caller: str) -> None:
        with self.state.lock:
            policy.require(caller, Operation.pause, owner=self.state.owner)
            if self.state.paused:
                raise InvalidState("registry is already paused")
            self.state.paused = True
            self.events.emit(ContractPaused(account=caller))
        logger.info("registry.paused", extra={"category": "system", "event": "registry.paused", "principal": caller})

    def resume(self, caller: str) -> None:
        with self.state.lock:
            policy.require(caller, Operation.resume, owner=self.state.owner)
            if not self.state.paused:
                raise InvalidState("registry is not paused")
            self.state.paused = False
            self.events.emit(ContractResumed(account=caller))
        logger.info("registry.resumed", extra={"category": "system", "event": "registry.resumed", "principal": caller})
