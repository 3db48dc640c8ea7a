from __future__ import annotations
from pydantic import BaseModel
from typing import Literal, Union

from task_registry.domain.task_models import TaskPriority

class Event(BaseModel):
    seq: int = 0

class TaskCreated(Event):
    name: Literal["TaskCreated"] = "TaskCreated"
    task_id: int
    description: str
    assigned_to: str
    due_date: int
    priority: TaskPriority
    created_at: int

class TaskCompleted(Event):
    name: Literal["TaskCompleted"] = "TaskCompleted"
    task_id: int
    assigned_to: str

class TaskDeleted(Event):
    name: Literal["TaskDeleted"] = "TaskDeleted"
    task_id: int
    deleted_by: str

class TaskReassigned(Event):
    name: Literal["TaskReassigned"] = "TaskReassigned"
    task_id: int
    old_assignee: str
    new_assignee: str

class TaskUpdated(Event):
    # carries the full current triple, not just the field that changed
    name: Literal["TaskUpdated"] = "TaskUpdated"
    task_id: int
    description: str
    due_date: int
    priority: TaskPriority

class ContractPaused(Event):
    name: Literal["ContractPaused"] = "ContractPaused"
    account: str

class ContractResumed(Event):
    name: Literal["ContractResumed"] = "ContractResumed"
    account: str

AnyEvent = Union[
    TaskCreated,
    TaskCompleted,
    TaskDeleted,
    TaskReassigned,
    TaskUpdated,
    ContractPaused,
    ContractResumed,
]
