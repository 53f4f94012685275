"""Runtime orchestration loop wiring triggers, the session controller, and shutdown."""

from __future__ import annotations

import logging
import os
import queue
from dataclasses import dataclass
from typing import Any, Callable, Optional

from app_config import AppConfig
from pomodoro import (
    LoggingSessionObserver,
    SessionController,
    TickerFactory,
    interval_ticker_factory,
)
from pomodoro.constants import TRIGGER_PAUSE_RESUME, TRIGGER_STOP_START
from pomodoro.contracts import NotifierLike
from triggers import TriggerConfig, TriggerListener

from .contracts import TriggerSourceLike

TriggerSourceBuilder = Callable[
    [TriggerConfig, Callable[[], None], Callable[[], None]],
    TriggerSourceLike,
]


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup and shutdown flow."""
    setup_shutdown_handlers: Callable[[Callable[[], None]], None]
    build_trigger_source: TriggerSourceBuilder


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    app_config: AppConfig
    trigger_config: TriggerConfig
    notifier: Optional[NotifierLike]
    hooks: RuntimeHooks
    ticker_factory: Optional[TickerFactory] = None


@dataclass(frozen=True)
class ShutdownRequested:
    pass


@dataclass(frozen=True)
class FatalErrorReported:
    error: BaseException


class RuntimeEngine:
    """Main runtime loop: serves both trigger channels until shutdown or a fatal error."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._events: queue.SimpleQueue[Any] = queue.SimpleQueue()

        timer = bootstrap.app_config.timer
        self._controller = SessionController(
            work_seconds=timer.work_seconds,
            rest_seconds=timer.rest_seconds,
            notifier=bootstrap.notifier,
            ticker_factory=bootstrap.ticker_factory
            or interval_ticker_factory(timer.tick_seconds),
            observer=LoggingSessionObserver(logging.getLogger("pomodoro")),
            fatal_handler=self.report_fatal,
            logger=logging.getLogger("pomodoro.controller"),
        )
        triggers_logger = logging.getLogger("triggers")
        self._stop_start_listener = TriggerListener(
            TRIGGER_STOP_START,
            self._controller.stop_start,
            error_handler=self.report_fatal,
            logger=triggers_logger,
        )
        self._pause_resume_listener = TriggerListener(
            TRIGGER_PAUSE_RESUME,
            self._controller.pause_resume,
            error_handler=self.report_fatal,
            logger=triggers_logger,
        )

    @property
    def controller(self) -> SessionController:
        return self._controller

    @property
    def stop_start_listener(self) -> TriggerListener:
        return self._stop_start_listener

    @property
    def pause_resume_listener(self) -> TriggerListener:
        return self._pause_resume_listener

    def request_shutdown(self) -> None:
        """Ask the loop to exit. Safe to call from a signal handler."""
        self._events.put(ShutdownRequested())

    def report_fatal(self, error: BaseException) -> None:
        self._events.put(FatalErrorReported(error))

    def run(self) -> int:
        trigger_source: Optional[TriggerSourceLike] = None
        try:
            self._stop_start_listener.start()
            self._pause_resume_listener.start()

            trigger_config = self._bootstrap.trigger_config
            trigger_source = self._bootstrap.hooks.build_trigger_source(
                trigger_config,
                self._stop_start_listener.fire,
                self._pause_resume_listener.fire,
            )
            trigger_source.install()
            self._bootstrap.hooks.setup_shutdown_handlers(self.request_shutdown)

            self._logger.info(
                "Pomodoro timer started with pid %d. Send %s to start/stop and %s "
                "to pause/resume. Sleeping...",
                os.getpid(),
                trigger_config.stop_start_signal.name,
                trigger_config.pause_resume_signal.name,
            )

            while True:
                event = self._poll_event()
                if event is None:
                    loop_exit = self._check_listeners()
                    if loop_exit is not None:
                        return loop_exit
                    continue

                event_exit = self._handle_event(event)
                if event_exit is not None:
                    return event_exit

        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown(trigger_source)

    def _poll_event(self) -> Optional[Any]:
        try:
            return self._events.get(timeout=0.25)
        except queue.Empty:
            return None

    def _check_listeners(self) -> Optional[int]:
        for listener in (self._stop_start_listener, self._pause_resume_listener):
            if not listener.is_running:
                self._logger.error("Listener %s stopped unexpectedly", listener.name)
                return 1
        return None

    def _handle_event(self, event: Any) -> Optional[int]:
        if isinstance(event, ShutdownRequested):
            self._logger.info("Shutdown requested.")
            return 0

        if isinstance(event, FatalErrorReported):
            self._logger.critical("Aborting after fatal error: %s", event.error)
            return 1

        self._logger.warning("Ignoring unknown event type: %s", type(event).__name__)
        return None

    def _shutdown(self, trigger_source: Optional[TriggerSourceLike]) -> None:
        if trigger_source is not None:
            try:
                trigger_source.uninstall()
            except Exception as error:
                self._logger.error("Error removing trigger handlers: %s", error, exc_info=True)

        self._logger.info("Stopping trigger listeners...")
        self._stop_start_listener.stop(timeout_seconds=5.0)
        self._pause_resume_listener.stop(timeout_seconds=5.0)

        self._logger.info("Stopping session controller...")
        self._controller.shutdown(timeout_seconds=5.0)
