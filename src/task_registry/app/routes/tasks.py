from typing import List

from fastapi import APIRouter, Depends, Query, Response

from task_registry.app.deps import get_caller, get_registry
from task_registry.domain.task_models import (
    DescriptionUpdate,
    DueDateUpdate,
    PriorityUpdate,
    Reassignment,
    Task,
    TaskCreate,
    TaskPage,
    TaskPriority,
)
from task_registry.services.registry import Registry

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.post("", response_model=Task, status_code=201)
async def create_task(payload: TaskCreate, caller: str = Depends(get_caller), reg: Registry = Depends(get_registry)):
    return await reg.tasks.create_task(caller, payload)


@router.get("", response_model=List[Task])
async def list_all(reg: Registry = Depends(get_registry)):
    return await reg.queries.list_all()


@router.get("/mine", response_model=TaskPage)
async def list_mine(
    page: int = Query(0, ge=0),
    page_size: int = Query(10, ge=0, le=1000),
    caller: str = Depends(get_caller),
    reg: Registry = Depends(get_registry),
):
    return await reg.queries.list_mine(caller, page, page_size)


@router.get("/by-priority/{priority}", response_model=List[int])
async def list_by_priority(priority: TaskPriority, reg: Registry = Depends(get_registry)):
    return await reg.queries.list_by_priority(priority)


@router.get("/by-completion", response_model=List[int])
async def list_by_completion(completed: bool = True, reg: Registry = Depends(get_registry)):
    return await reg.queries.list_by_completion(completed)


@router.get("/count")
async def count(reg: Registry = Depends(get_registry)):
    return {"count": await reg.queries.count()}


@router.get("/count/{principal}")
async def count_by_assignee(principal: str, reg: Registry = Depends(get_registry)):
    return {"principal": principal, "count": await reg.queries.count_by_assignee(principal)}


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: int, reg: Registry = Depends(get_registry)):
    return await reg.queries.get_task(task_id)


@router.post("/{task_id}/complete", response_model=Task)
async def complete_task(task_id: int, caller: str = Depends(get_caller), reg: Registry = Depends(get_registry)):
    return await reg.tasks.complete_task(caller, task_id)


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: int, caller: str = Depends(get_caller), reg: Registry = Depends(get_registry)):
    await reg.tasks.delete_task(caller, task_id)
    return Response(status_code=204)


@router.post("/{task_id}/reassign", response_model=Task)
async def reassign_task(
    task_id: int,
    payload: Reassignment,
    caller: str = Depends(get_caller),
    reg: Registry = Depends(get_registry),
):
    return await reg.tasks.reassign_task(caller, task_id, payload.new_assignee)


@router.patch("/{task_id}/description", response_model=Task)
async def update_description(
    task_id: int,
    payload: DescriptionUpdate,
    caller: str = Depends(get_caller),
    reg: Registry = Depends(get_registry),
):
    return await reg.tasks.update_description(caller, task_id, payload.description)


@router.patch("/{task_id}/due-date", response_model=Task)
async def update_due_date(
    task_id: int,
    payload: DueDateUpdate,
    caller: str = Depends(get_caller),
    reg: Registry = Depends(get_registry),
):
    return await reg.tasks.update_due_date(caller, task_id, payload.due_date)


@router.patch("/{task_id}/priority", response_model=Task)
async def update_priority(
    task_id: int,
    payload: PriorityUpdate,
    caller: str = Depends(get_caller),
    reg: Registry = Depends(get_registry),
):
    return await reg.tasks.update_priority(caller, task_id, payload.priority)
