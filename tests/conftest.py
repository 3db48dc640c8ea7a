from __future__ import annotations

import asyncio
import os
import tempfile

# Importing the app module builds a default app; keep its logs out of the repo.
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="registry_logs_"))

import pytest
from fastapi.testclient import TestClient

from task_registry.app.main import create_app
from task_registry.config import Settings
from task_registry.services.registry import build_registry

OWNER = "owner-o"
ALICE = "alice"
BOB = "bob"


class FakeClock:
    """Deterministic logical clock; returns `now` until advanced."""

    def __init__(self, now: int = 1_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int = 1) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def registry(clock: FakeClock):
    return build_registry(OWNER, clock=clock)


@pytest.fixture()
def run():
    return asyncio.run


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(owner=OWNER, log_dir=str(tmp_path / "logs"))


@pytest.fixture()
def client(settings: Settings, clock: FakeClock) -> TestClient:
    return TestClient(create_app(settings, clock=clock))


def as_(principal: str) -> dict:
    return {"X-Principal": principal}
