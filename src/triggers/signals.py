"""OS signal trigger source binding signals to trigger listeners."""

from __future__ import annotations

import logging
import signal
from typing import Any, Callable, Optional

from .config import TriggerConfig

SignalHandler = Callable[[int, Any], None]


class SignalTriggerSource:
    """Installs handlers that fire a trigger callback when a signal arrives.

    Handlers run on the main thread between bytecodes, so the callbacks must
    not block or log; `TriggerListener.fire` only enqueues.
    """

    def __init__(
        self,
        config: TriggerConfig,
        *,
        on_stop_start: Callable[[], None],
        on_pause_resume: Callable[[], None],
        logger: Optional[logging.Logger] = None,
    ):
        self._bindings: dict[signal.Signals, Callable[[], None]] = {
            config.stop_start_signal: on_stop_start,
            config.pause_resume_signal: on_pause_resume,
        }
        self._logger = logger or logging.getLogger("triggers")
        self._previous: dict[signal.Signals, Any] = {}

    def install(self) -> None:
        for signum, callback in self._bindings.items():
            self._previous[signum] = signal.signal(signum, _make_handler(callback))
            self._logger.debug("Bound %s to trigger", signum.name)

    def uninstall(self) -> None:
        while self._previous:
            signum, previous = self._previous.popitem()
            signal.signal(signum, previous)


def _make_handler(callback: Callable[[], None]) -> SignalHandler:
    def handler(signum: int, frame) -> None:
        callback()

    return handler
