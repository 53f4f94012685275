"""Countdown engine running a single work or rest session."""

from __future__ import annotations

import logging
from typing import Optional

from .constants import OUTCOME_COMPLETED, OUTCOME_STOPPED
from .observer import LoggingSessionObserver, SessionObserver
from .signals import SessionEvent
from .types import CountdownResult, Session


class CountdownEngine:
    """Counts a session down one tick at a time until it expires or is stopped.

    The engine holds no state between runs; everything live belongs to the
    `Session` it is given. `run` blocks the calling thread and consumes the
    session's signals as the only consumer.
    """

    def __init__(
        self,
        *,
        observer: Optional[SessionObserver] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._logger = logger or logging.getLogger("pomodoro.countdown")
        self._observer = observer or LoggingSessionObserver(self._logger)

    def run(self, session: Session) -> CountdownResult:
        session.remaining_seconds = int(session.duration_seconds)
        session.paused = False
        ticks_observed = 0
        self._observer.session_started(session)

        while True:
            if session.remaining_seconds <= 0:
                session.remaining_seconds = 0
                self._observer.session_completed(session)
                return CountdownResult(
                    outcome=OUTCOME_COMPLETED,
                    remaining_seconds=0,
                    ticks_observed=ticks_observed,
                )

            event = session.signals.wait_next()
            if event is SessionEvent.TICK:
                ticks_observed += 1
                if not session.paused:
                    session.remaining_seconds -= 1
                    self._observer.session_ticked(session)
                continue

            if event is SessionEvent.PAUSE_RESUME:
                session.paused = not session.paused
                self._observer.session_pause_toggled(session)
                continue

            if event is SessionEvent.STOP:
                self._observer.session_stopped(session)
                return CountdownResult(
                    outcome=OUTCOME_STOPPED,
                    remaining_seconds=session.remaining_seconds,
                    ticks_observed=ticks_observed,
                )

            self._logger.warning("Ignoring unknown session event: %r", event)
