from fastapi import Request

from task_registry.domain.errors import MissingPrincipal
from task_registry.services.registry import Registry


def get_registry(request: Request) -> Registry:
    return request.app.state.registry


def get_caller(request: Request) -> str:
    """The calling principal comes from the request context, never from the payload."""
    header = request.app.state.settings.principal_header
    caller = (request.headers.get(header) or "").strip()
    if not caller:
        raise MissingPrincipal(f"missing {header} header")
    return caller
