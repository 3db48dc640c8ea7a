from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException, Request

from task_registry.observability.logging import log_path

router = APIRouter(prefix="/api/logs", tags=["logs"])


def _tail_lines(path: Path, n: int) -> list[str]:
    text = path.read_text(encoding="utf-8", errors="replace")
    lines = text.splitlines()
    return lines[-n:] if n > 0 else lines


def _matches(obj: dict, category: Optional[str], level: Optional[str], request_id: Optional[str], event: Optional[str], q: Optional[str]) -> bool:
    if category and obj.get("category") != category:
        return False
    if level and str(obj.get("level", "")).upper() != level.upper():
        return False
    if request_id and obj.get("request_id") != request_id:
        return False
    if event and obj.get("event") != event:
        return False
    if q and q.lower() not in json.dumps(obj).lower():
        return False
    return True


@router.get("")
def get_logs(
    request: Request,
    tail: int = 300,
    category: Optional[str] = None,
    level: Optional[str] = None,
    request_id: Optional[str] = None,
    event: Optional[str] = None,
    q: Optional[str] = None,
):
    path = log_path(request.app.state.settings.log_dir)
    if not path.exists():
        raise HTTPException(status_code=404, detail=f"Log file not found: {path}")

    tail = max(1, min(tail, 5000))

    items = []
    for line in _tail_lines(path, tail):
        try:
            obj = json.loads(line)
        except json.JSONDecodeError:
            continue
        if _matches(obj, category, level, request_id, event, q):
            items.append(obj)

    return {"returned": len(items), "tail": tail, "items": items}
