from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable, Deque, List

from task_registry.domain.events import Event

logger = logging.getLogger("registry.events")

Subscriber = Callable[[Event], None]


class EventLog:
    """
    Ordered record of every notification the registry emits.

    Events are appended by the service while it still holds the registry
    lock, so `seq` order matches mutation order. Only the newest `maxlen`
    events are retained; `seq` keeps counting past trimmed ones.

    Subscribers are notified best-effort: by the time they run the
    mutation has committed, so a failing subscriber is logged and never
    reported to the caller of the operation.
    """

    def __init__(self, maxlen: int = 10_000) -> None:
        if maxlen < 1:
            raise ValueError("maxlen must be positive")
        self._events: Deque[Event] = deque(maxlen=maxlen)
        self._seq = 0
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()

    def emit(self, event: Event) -> Event:
        with self._lock:
            self._seq += 1
            event = event.model_copy(update={"seq": self._seq})
            self._events.append(event)
            subscribers = list(self._subscribers)

        logger.info(
            event.name,
            extra={"category": "events", "event": event.name, **event.model_dump(mode="json", exclude={"name"})},
        )
        for callback in subscribers:
            try:
                callback(event)
            except Exception:
                logger.exception(
                    "subscriber.failed",
                    extra={
                        "category": "events",
                        "event": "subscriber.failed",
                        "seq": event.seq,
                        "subscriber": getattr(callback, "__qualname__", repr(callback)),
                    },
                )
        return event

    def subscribe(self, callback: Subscriber) -> None:
        with self._lock:
            self._subscribers.append(callback)

    def since(self, seq: int = 0) -> List[Event]:
        with self._lock:
            return [e for e in self._events if e.seq > seq]
