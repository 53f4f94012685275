"""Per-session event fan-in for ticks, pause/resume toggles, and stop requests."""

from __future__ import annotations

import threading
from collections import deque
from enum import Enum
from typing import Optional


class SessionEvent(Enum):
    """Events a running countdown can wake up for."""

    TICK = "tick"
    PAUSE_RESUME = "pause_resume"
    STOP = "stop"


class SessionSignals:
    """Single-consumer channel merging ticks, toggles, and stop for one session.

    Ticks and pause/resume toggles are delivered in arrival order. Stop is a
    sticky flag that pre-empts anything still queued, so once `stop()` has
    returned the consumer never processes another tick.
    """

    def __init__(self):
        self._condition = threading.Condition()
        self._pending: deque[SessionEvent] = deque()
        self._stopped = False

    @property
    def stopped(self) -> bool:
        with self._condition:
            return self._stopped

    def tick(self) -> None:
        self._post(SessionEvent.TICK)

    def pause_resume(self) -> None:
        self._post(SessionEvent.PAUSE_RESUME)

    def stop(self) -> None:
        with self._condition:
            self._stopped = True
            self._pending.clear()
            self._condition.notify_all()

    def wait_next(self, timeout: Optional[float] = None) -> Optional[SessionEvent]:
        """Block until the next event is available.

        Returns None only when `timeout` expires with nothing to deliver.
        """
        with self._condition:
            self._condition.wait_for(
                lambda: self._stopped or bool(self._pending),
                timeout=timeout,
            )
            if self._stopped:
                return SessionEvent.STOP
            if not self._pending:
                return None
            return self._pending.popleft()

    def _post(self, event: SessionEvent) -> None:
        with self._condition:
            if self._stopped:
                return
            self._pending.append(event)
            self._condition.notify_all()
