import logging
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from task_registry.app.middleware.access_log import AccessLogMiddleware
from task_registry.app.routes import logs, registry, tasks
from task_registry.config import DEFAULT_OWNER, Settings, load_settings
from task_registry.domain.errors import RegistryError
from task_registry.observability.logging import setup_logging
from task_registry.services.registry import build_registry
from task_registry.services.task_service import unix_clock

logger = logging.getLogger("registry.system")


async def registry_error_handler(request: Request, exc: RegistryError):
    logger.warning(
        "request.rejected",
        extra={
            "category": "errors",
            "event": "request.rejected",
            "request_id": getattr(request.state, "request_id", None),
            "path": request.url.path,
            "error": exc.kind,
            "detail": exc.detail,
        },
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.kind, "detail": exc.detail})


def create_app(settings: Optional[Settings] = None, clock: Callable[[], int] = unix_clock) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level, settings.log_dir, static_fields={"owner": settings.owner})
    logger.info("system.start", extra={"category": "system", "event": "system.start", "owner": settings.owner})
    if settings.owner == DEFAULT_OWNER:
        logger.warning(
            "system.default_owner",
            extra={"category": "system", "event": "system.default_owner", "hint": "set TASK_REGISTRY_OWNER"},
        )

    app = FastAPI(title="Task Registry")
    app.add_middleware(AccessLogMiddleware, principal_header=settings.principal_header)

    app.state.settings = settings
    app.state.registry = build_registry(settings.owner, clock=clock, event_log_size=settings.event_log_size)

    app.add_exception_handler(RegistryError, registry_error_handler)

    # Routers
    app.include_router(tasks.router)
    app.include_router(registry.router)
    app.include_router(logs.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
