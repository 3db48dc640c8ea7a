from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from enum import Enum
from typing import List

class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"

class TaskCreate(BaseModel):
    description: str = Field(default="", max_length=4000)
    due_date: int = Field(ge=0)
    priority: TaskPriority = TaskPriority.low

class Task(BaseModel):
    """
    A task slot. Every field defaults to its zero value, which is also
    what a slot looks like after deletion.
    """
    model_config = ConfigDict(frozen=True)

    id: int = 0
    description: str = ""
    assigned_to: str = ""
    completed: bool = False
    due_date: int = 0
    priority: TaskPriority = TaskPriority.low
    created_at: int = 0

    @property
    def is_cleared(self) -> bool:
        return self.id == 0

class DescriptionUpdate(BaseModel):
    description: str = Field(max_length=4000)

class DueDateUpdate(BaseModel):
    due_date: int = Field(ge=0)

class PriorityUpdate(BaseModel):
    priority: TaskPriority

class Reassignment(BaseModel):
    new_assignee: str = Field(min_length=1, max_length=200)

class TaskPage(BaseModel):
    page: int
    page_size: int
    total: int
    items: List[Task]
