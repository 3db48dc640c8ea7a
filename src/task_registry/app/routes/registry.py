from typing import List

from fastapi import APIRouter, Depends, Query, Response

from task_registry.app.deps import get_caller, get_registry
from task_registry.domain.events import AnyEvent
from task_registry.services.registry import Registry

router = APIRouter(prefix="/api", tags=["registry"])


async def _status(reg: Registry) -> dict:
    return {
        "owner": reg.state.owner,
        "paused": await reg.queries.is_paused(),
        "count": await reg.queries.count(),
        "counter": await reg.queries.counter(),
    }


@router.get("/registry")
async def registry_status(reg: Registry = Depends(get_registry)):
    return await _status(reg)


@router.post("/registry/pause")
async def pause(caller: str = Depends(get_caller), reg: Registry = Depends(get_registry)):
    reg.pause.pause(caller)
    return await _status(reg)


@router.post("/registry/resume")
async def resume(caller: str = Depends(get_caller), reg: Registry = Depends(get_registry)):
    reg.pause.resume(caller)
    return await _status(reg)


@router.delete("/registry/tasks/{task_id}", status_code=204)
async def owner_delete(task_id: int, caller: str = Depends(get_caller), reg: Registry = Depends(get_registry)):
    await reg.tasks.owner_delete_task(caller, task_id)
    return Response(status_code=204)


@router.get("/events", response_model=List[AnyEvent])
async def list_events(since: int = Query(0, ge=0), reg: Registry = Depends(get_registry)):
    return reg.events.since(since)
