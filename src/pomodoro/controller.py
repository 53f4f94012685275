"""Thread-safe work/rest session state machine driven by external triggers."""

from __future__ import annotations

import logging
import math
import threading
from typing import Callable, Optional

from .constants import (
    DEFAULT_REST_SECONDS,
    DEFAULT_TICK_SECONDS,
    DEFAULT_WORK_SECONDS,
    REASON_ALREADY_ACTIVE,
    REASON_NOT_ACTIVE,
    REASON_SHUT_DOWN,
    REASON_STARTED,
    REASON_STOPPED,
    REASON_TOGGLED,
    TRIGGER_PAUSE_RESUME,
    TRIGGER_START,
    TRIGGER_STOP,
    TRIGGER_STOP_START,
)
from .contracts import NotifierLike
from .countdown import CountdownEngine
from .errors import SessionInvariantError
from .observer import LoggingSessionObserver, SessionObserver
from .ticker import TickerFactory, interval_ticker_factory
from .types import ControllerSnapshot, Mode, Session, TriggerName, TriggerResult

FatalHandler = Callable[[BaseException], None]

ACTIVE_MODES: frozenset[Mode] = frozenset({Mode.WORK, Mode.REST})


def _raise_fatal(error: BaseException) -> None:
    raise error


class SessionController:
    """Owns the current mode and supervises one countdown session at a time.

    Every trigger and every completion hand-off runs under a single lock, so
    two near-simultaneous triggers can never interleave their mode updates.
    The countdown itself runs on a worker thread outside the lock and only
    listens on the session's signals.

    After any stop the next start is always a work session; rest is never
    resumed from idle.
    """

    def __init__(
        self,
        *,
        work_seconds: float = DEFAULT_WORK_SECONDS,
        rest_seconds: float = DEFAULT_REST_SECONDS,
        notifier: Optional[NotifierLike] = None,
        ticker_factory: Optional[TickerFactory] = None,
        observer: Optional[SessionObserver] = None,
        fatal_handler: Optional[FatalHandler] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._work_seconds = _whole_seconds(work_seconds)
        self._rest_seconds = _whole_seconds(rest_seconds)
        self._notifier = notifier
        self._ticker_factory = ticker_factory or interval_ticker_factory(
            DEFAULT_TICK_SECONDS
        )
        self._logger = logger or logging.getLogger("pomodoro.controller")
        self._observer = observer or LoggingSessionObserver(
            logging.getLogger("pomodoro")
        )
        self._fatal_handler = fatal_handler or _raise_fatal
        self._engine = CountdownEngine(
            observer=self._observer,
            logger=logging.getLogger("pomodoro.countdown"),
        )

        self._lock = threading.Lock()
        self._mode = Mode.IDLE
        self._previous_mode = Mode.REST
        self._session: Optional[Session] = None
        self._worker: Optional[threading.Thread] = None
        self._closed = False

    @property
    def mode(self) -> Mode:
        with self._lock:
            return self._mode

    def snapshot(self) -> ControllerSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def stop_start(self) -> TriggerResult:
        """Stop the active session, or start a work session when idle."""
        with self._lock:
            if self._closed:
                return self._ignored_locked(TRIGGER_STOP_START, REASON_SHUT_DOWN)
            if self._mode in ACTIVE_MODES:
                return self._stop_locked(TRIGGER_STOP_START)
            if self._mode is Mode.IDLE:
                return self._start_locked(TRIGGER_STOP_START)
            raise SessionInvariantError(f"Unknown mode: {self._mode!r}")

    def start(self) -> TriggerResult:
        with self._lock:
            if self._closed:
                return self._ignored_locked(TRIGGER_START, REASON_SHUT_DOWN)
            if self._mode in ACTIVE_MODES:
                return self._ignored_locked(TRIGGER_START, REASON_ALREADY_ACTIVE)
            if self._mode is Mode.IDLE:
                return self._start_locked(TRIGGER_START)
            raise SessionInvariantError(f"Unknown mode: {self._mode!r}")

    def stop(self) -> TriggerResult:
        with self._lock:
            if self._mode in ACTIVE_MODES:
                return self._stop_locked(TRIGGER_STOP)
            if self._mode is Mode.IDLE:
                return self._ignored_locked(TRIGGER_STOP, REASON_NOT_ACTIVE)
            raise SessionInvariantError(f"Unknown mode: {self._mode!r}")

    def pause_resume(self) -> TriggerResult:
        """Toggle pause on the active session. Ignored while idle."""
        with self._lock:
            if self._mode is Mode.IDLE:
                return self._ignored_locked(TRIGGER_PAUSE_RESUME, REASON_NOT_ACTIVE)
            if self._mode not in ACTIVE_MODES:
                raise SessionInvariantError(f"Unknown mode: {self._mode!r}")

            session = self._require_session_locked()
            self._logger.info("Triggering pause/resume of %s session", session.kind.value)
            session.signals.pause_resume()
            return TriggerResult(
                trigger=TRIGGER_PAUSE_RESUME,
                accepted=True,
                reason=REASON_TOGGLED,
                snapshot=self._snapshot_locked(),
            )

    def shutdown(self, timeout_seconds: float = 5.0) -> None:
        """Stop any active session, refuse new ones, and wait for the worker to exit."""
        with self._lock:
            self._closed = True
            if self._session is not None:
                self._session.signals.stop()
                self._session = None
                self._previous_mode = Mode.REST
                self._set_mode_locked(Mode.IDLE)
            worker = self._worker

        if worker is None or worker is threading.current_thread():
            return
        worker.join(timeout=timeout_seconds)
        if worker.is_alive():
            self._logger.error(
                "Session worker did not stop within %ss", timeout_seconds
            )

    def _start_locked(self, trigger: TriggerName) -> TriggerResult:
        if self._previous_mode is not Mode.REST:
            raise SessionInvariantError(
                f"Unexpected previous mode while idle: {self._previous_mode!r}"
            )

        self._set_mode_locked(Mode.WORK)
        self._launch_locked(Mode.WORK)
        return TriggerResult(
            trigger=trigger,
            accepted=True,
            reason=REASON_STARTED,
            snapshot=self._snapshot_locked(),
        )

    def _stop_locked(self, trigger: TriggerName) -> TriggerResult:
        session = self._require_session_locked()
        self._logger.info("Stopping %s session", session.kind.value)
        session.signals.stop()
        self._session = None
        # Stopping always resumes with work.
        self._previous_mode = Mode.REST
        self._set_mode_locked(Mode.IDLE)
        return TriggerResult(
            trigger=trigger,
            accepted=True,
            reason=REASON_STOPPED,
            snapshot=self._snapshot_locked(),
        )

    def _launch_locked(self, kind: Mode) -> None:
        duration = self._work_seconds if kind is Mode.WORK else self._rest_seconds
        session = Session(kind=kind, duration_seconds=duration)
        self._session = session
        self._worker = threading.Thread(
            target=self._run_session,
            args=(session,),
            daemon=True,
            name=f"{kind.value}-session",
        )
        self._worker.start()

    def _run_session(self, session: Session) -> None:
        ticker = self._ticker_factory(session.signals)
        ticker.start()
        try:
            result = self._engine.run(session)
        finally:
            ticker.stop()

        if not result.completed:
            return

        try:
            self._complete_session(session)
        except SessionInvariantError as error:
            self._logger.critical(
                "Session controller invariant violated: %s", error, exc_info=True
            )
            self._fatal_handler(error)

    def _complete_session(self, session: Session) -> None:
        with self._lock:
            if self._closed or self._session is not session:
                self._logger.debug(
                    "Dropping completion of a %s session that is no longer active",
                    session.kind.value,
                )
                return

            ending = self._mode
            if ending is Mode.WORK:
                starting = Mode.REST
            elif ending is Mode.REST:
                starting = Mode.WORK
            else:
                raise SessionInvariantError(
                    f"Session completed while controller is in mode {ending!r}"
                )

            self._notify_locked(ending, starting)
            self._previous_mode = ending
            self._set_mode_locked(starting)
            self._launch_locked(starting)

    def _notify_locked(self, ending: Mode, starting: Mode) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.notify(ending.session_name, starting.session_name)
        except Exception as error:
            self._logger.warning("Session notifier failed: %s", error)

    def _set_mode_locked(self, mode: Mode) -> None:
        previous = self._mode
        self._mode = mode
        self._observer.mode_changed(previous, mode)

    def _require_session_locked(self) -> Session:
        session = self._session
        if session is None or session.kind is not self._mode:
            raise SessionInvariantError(
                f"Mode {self._mode!r} has no matching active session"
            )
        return session

    def _ignored_locked(self, trigger: TriggerName, reason: str) -> TriggerResult:
        self._observer.trigger_ignored(trigger, reason, self._mode)
        return TriggerResult(
            trigger=trigger,
            accepted=False,
            reason=reason,
            snapshot=self._snapshot_locked(),
        )

    def _snapshot_locked(self) -> ControllerSnapshot:
        session = self._session
        if session is None:
            return ControllerSnapshot(mode=self._mode, previous_mode=self._previous_mode)
        return ControllerSnapshot(
            mode=self._mode,
            previous_mode=self._previous_mode,
            session_kind=session.kind,
            remaining_seconds=session.remaining_seconds,
            paused=session.paused,
        )


def _whole_seconds(seconds: float) -> int:
    # Partial seconds still need a full tick to elapse.
    return int(math.ceil(seconds))
