"""
Access rules for registry operations.

Every role decision goes through `is_allowed`, so the whole rule set lives
in the two tables below.
"""
from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Optional

from task_registry.domain.errors import Unauthorized
from task_registry.domain.task_models import Task


class Operation(str, Enum):
    create = "create"
    complete = "complete"
    delete = "delete"
    reassign = "reassign"
    update = "update"
    owner_delete = "owner_delete"
    pause = "pause"
    resume = "resume"


OWNER_OPERATIONS: FrozenSet[Operation] = frozenset(
    {Operation.owner_delete, Operation.pause, Operation.resume}
)
ASSIGNEE_OPERATIONS: FrozenSet[Operation] = frozenset(
    {Operation.complete, Operation.delete, Operation.reassign, Operation.update}
)


def is_allowed(caller: str, operation: Operation, *, owner: str, task: Optional[Task] = None) -> bool:
    if not caller:
        return False
    if operation in OWNER_OPERATIONS:
        return caller == owner
    if operation in ASSIGNEE_OPERATIONS:
        return task is not None and caller == task.assigned_to
    # create: any identified caller, the new task is assigned to them
    return operation == Operation.create


def require(caller: str, operation: Operation, *, owner: str, task: Optional[Task] = None) -> None:
    if not is_allowed(caller, operation, owner=owner, task=task):
        role = "owner" if operation in OWNER_OPERATIONS else "assignee"
        raise Unauthorized(f"{operation.value} requires the {role}")
