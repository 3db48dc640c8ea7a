from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Mapping, Optional

LOG_FILENAME = "registry.jsonl"
APP_LOGGER = "registry"

_BUILTIN_ATTRS = frozenset((
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
    "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
    "created", "msecs", "relativeCreated", "thread", "threadName", "processName",
    "process", "message", "taskName",
))


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line.

    `static_fields` are stamped on every line (e.g. the owner the process
    was started with); per-call context comes from `extra={...}`.
    """

    def __init__(self, static_fields: Optional[Mapping[str, Any]] = None):
        super().__init__()
        self.static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            **self.static_fields,
        }

        for k, v in record.__dict__.items():
            if k in _BUILTIN_ATTRS or k.startswith("_"):
                continue
            payload[k] = v

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def log_path(log_dir: str) -> Path:
    return Path(log_dir) / LOG_FILENAME


def setup_logging(level: str = "INFO", log_dir: str = "./logs", static_fields: Optional[Mapping[str, Any]] = None) -> None:
    """
    Route every `registry.*` logger to the console and to
    `<log_dir>/registry.jsonl`. Safe to call again (e.g. one app per test):
    handlers from a previous call are closed and replaced.
    """
    level = level.upper()
    path = log_path(log_dir)
    path.parent.mkdir(parents=True, exist_ok=True)

    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.setLevel(level)
    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)
        handler.close()

    fmt = JsonFormatter({"service": "task-registry", **(static_fields or {})})

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)
    app_logger.addHandler(console)

    file_handler = RotatingFileHandler(
        path,
        maxBytes=10_000_000,  # 10MB
        backupCount=10,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(fmt)
    app_logger.addHandler(file_handler)

    # Access logging happens in our middleware
    logging.getLogger("uvicorn.access").setLevel(logging.CRITICAL)
    logging.getLogger("uvicorn.error").setLevel(level)
