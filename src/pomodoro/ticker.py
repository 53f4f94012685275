"""Tick sources that feed one tick per interval into a session's signals."""

from __future__ import annotations

import logging
import math
import threading
import time
from typing import Callable, Optional, Protocol

from .constants import DEFAULT_TICK_SECONDS
from .signals import SessionSignals


class Ticker(Protocol):
    """Lifecycle interface for a per-session tick source."""

    def start(self) -> None: ...

    def stop(self) -> None: ...


TickerFactory = Callable[[SessionSignals], Ticker]


class IntervalTicker:
    """Background thread posting a tick every `interval_seconds` of monotonic time."""

    def __init__(
        self,
        signals: SessionSignals,
        *,
        interval_seconds: float = DEFAULT_TICK_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        if not math.isfinite(interval_seconds) or interval_seconds <= 0:
            raise ValueError("interval_seconds must be a finite number greater than zero")

        self._signals = signals
        self._interval_seconds = float(interval_seconds)
        self._logger = logger or logging.getLogger("pomodoro.ticker")
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            self._logger.warning("Ticker is already started")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name="session-ticker",
        )
        self._thread.start()

    def stop(self, timeout_seconds: float = 1.0) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return
        thread.join(timeout=timeout_seconds)
        if thread.is_alive():
            self._logger.error(
                "Ticker thread did not stop within %ss", timeout_seconds
            )

    def _run(self) -> None:
        # Deadlines are scheduled from the start time so slow wake-ups do not drift.
        next_deadline = time.monotonic() + self._interval_seconds
        while not self._stop_event.wait(max(0.0, next_deadline - time.monotonic())):
            self._signals.tick()
            next_deadline += self._interval_seconds


def interval_ticker_factory(
    interval_seconds: float = DEFAULT_TICK_SECONDS,
    *,
    logger: Optional[logging.Logger] = None,
) -> TickerFactory:
    """Build a factory producing `IntervalTicker`s with a fixed interval."""

    def factory(signals: SessionSignals) -> Ticker:
        return IntervalTicker(signals, interval_seconds=interval_seconds, logger=logger)

    return factory
