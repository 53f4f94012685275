"""Listener threads forwarding one named trigger channel to a handler."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any, Callable, Optional

ErrorHandler = Callable[[BaseException], None]

_SHUTDOWN = object()


class TriggerListener:
    """Serves one trigger channel on its own thread.

    `fire()` only enqueues and never blocks, so it is safe to call from a
    signal handler. Each fired trigger is handed to `handler` in order on the
    listener thread.
    """

    def __init__(
        self,
        name: str,
        handler: Callable[[], Any],
        *,
        error_handler: Optional[ErrorHandler] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._name = name
        self._handler = handler
        self._error_handler = error_handler
        self._logger = logger or logging.getLogger("triggers")
        self._queue: queue.SimpleQueue[object] = queue.SimpleQueue()
        self._thread: Optional[threading.Thread] = None
        self._running_lock = threading.Lock()
        self._running = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_running(self) -> bool:
        with self._running_lock:
            return (
                self._running and self._thread is not None and self._thread.is_alive()
            )

    def start(self) -> None:
        with self._running_lock:
            if self._running and self._thread is not None and self._thread.is_alive():
                self._logger.warning("Listener %s is already running", self._name)
                return

            self._running = True
            self._thread = threading.Thread(
                target=self._run,
                daemon=True,
                name=f"{self._name}-listener",
            )
            self._thread.start()

    def fire(self) -> None:
        self._queue.put(self._name)

    def stop(self, timeout_seconds: float = 5.0) -> None:
        with self._running_lock:
            if not self._running:
                return
            thread = self._thread

        self._queue.put(_SHUTDOWN)
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout_seconds)
            if thread.is_alive():
                self._logger.error(
                    "Listener %s did not stop within %ss", self._name, timeout_seconds
                )
                return

        with self._running_lock:
            self._running = False

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _SHUTDOWN:
                return

            self._logger.info("Received %s trigger", self._name)
            try:
                self._handler()
            except Exception as error:
                if self._error_handler is None:
                    raise
                self._logger.critical(
                    "%s trigger handler failed: %s", self._name, error, exc_info=True
                )
                self._error_handler(error)
                return
