from __future__ import annotations


class RegistryError(Exception):
    """Base class for every failure a registry operation can report."""

    kind = "registry_error"
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class Unauthorized(RegistryError):
    kind = "unauthorized"
    status_code = 403


class NotFound(RegistryError):
    kind = "not_found"
    status_code = 404


class InvalidState(RegistryError):
    kind = "invalid_state"
    status_code = 409


class RegistryPaused(InvalidState):
    kind = "paused"


class AlreadyCompleted(RegistryError):
    kind = "already_completed"
    status_code = 409


class MissingPrincipal(Unauthorized):
    kind = "unauthenticated"
    status_code = 401


class InvalidInput(RegistryError):
    kind = "invalid_input"
    status_code = 422
