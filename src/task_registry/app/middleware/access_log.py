import time
import uuid
import logging
from typing import Iterable
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("registry.access")


def _outcome(status_code: int) -> str:
    if status_code >= 500:
        return "server_error"
    if status_code >= 400:
        return "rejected"
    return "ok"


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    One structured line per request, tagged with the request id and the
    calling principal. Probe paths such as /health only log at DEBUG.
    """

    def __init__(self, app, principal_header: str = "X-Principal", quiet_paths: Iterable[str] = ("/health",)):
        super().__init__(app)
        self.principal_header = principal_header
        self.quiet_paths = frozenset(quiet_paths)

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        principal = (request.headers.get(self.principal_header) or "").strip() or None
        path = request.url.path
        quiet = path in self.quiet_paths
        start = time.perf_counter()

        request.state.request_id = request_id
        request.state.principal = principal

        base = {
            "category": "http",
            "request_id": request_id,
            "method": request.method,
            "path": path,
            "principal": principal,
        }
        logger.log(
            logging.DEBUG if quiet else logging.INFO,
            "request.start",
            extra={**base, "event": "request.start", "query": str(request.url.query)},
        )

        try:
            response: Response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={**base, "event": "request.error", "duration_ms": round((time.perf_counter() - start) * 1000, 2)},
            )
            raise

        response.headers["X-Request-ID"] = request_id
        outcome = _outcome(response.status_code)
        if quiet:
            level = logging.DEBUG
        elif outcome == "server_error":
            level = logging.ERROR
        else:
            level = logging.INFO

        logger.log(
            level,
            "request.end",
            extra={
                **base,
                "event": "request.end",
                "status_code": response.status_code,
                "outcome": outcome,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return response
