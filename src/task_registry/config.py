from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_OWNER = "owner"


@dataclass(frozen=True)
class Settings:
    owner: str = DEFAULT_OWNER
    principal_header: str = "X-Principal"
    log_level: str = "INFO"
    log_dir: str = "./logs"
    event_log_size: int = 10_000


def load_settings() -> Settings:
    """Read settings from the environment. Unset or blank values fall back to defaults."""
    def env(name: str, default: str) -> str:
        v = os.getenv(name)
        return default if v is None or not v.strip() else v.strip()

    return Settings(
        owner=env("TASK_REGISTRY_OWNER", DEFAULT_OWNER),
        principal_header=env("TASK_REGISTRY_PRINCIPAL_HEADER", "X-Principal"),
        log_level=env("LOG_LEVEL", "INFO").upper(),
        log_dir=env("LOG_DIR", "./logs"),
        event_log_size=int(env("TASK_REGISTRY_EVENT_LOG_SIZE", "10000")),
    )
