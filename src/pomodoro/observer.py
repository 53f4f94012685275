"""Progress notifications emitted by the countdown engine and session controller."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from .types import Mode, Session


class SessionObserver(Protocol):
    """Receives human-observable progress. Never influences control flow."""

    def session_started(self, session: Session) -> None: ...

    def session_ticked(self, session: Session) -> None: ...

    def session_pause_toggled(self, session: Session) -> None: ...

    def session_stopped(self, session: Session) -> None: ...

    def session_completed(self, session: Session) -> None: ...

    def mode_changed(self, previous: Mode, current: Mode) -> None: ...

    def trigger_ignored(self, trigger: str, reason: str, mode: Mode) -> None: ...


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as `MM:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


class LoggingSessionObserver:
    """Default observer writing one log line per progress event."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("pomodoro")

    def session_started(self, session: Session) -> None:
        self._logger.info(
            "Starting new %s session (%s)",
            session.kind.value,
            format_duration(session.duration_seconds),
        )

    def session_ticked(self, session: Session) -> None:
        self._logger.debug(
            "%s session tick (%s remaining)",
            session.kind.value,
            format_duration(session.remaining_seconds),
        )

    def session_pause_toggled(self, session: Session) -> None:
        self._logger.info(
            "%s session %s (%s remaining)",
            session.kind.value,
            "paused" if session.paused else "resumed",
            format_duration(session.remaining_seconds),
        )

    def session_stopped(self, session: Session) -> None:
        self._logger.info(
            "%s session stopped (%s remaining discarded)",
            session.kind.value,
            format_duration(session.remaining_seconds),
        )

    def session_completed(self, session: Session) -> None:
        self._logger.info("%s session done", session.kind.value)

    def mode_changed(self, previous: Mode, current: Mode) -> None:
        self._logger.debug("Mode changed: %s -> %s", previous.value, current.value)

    def trigger_ignored(self, trigger: str, reason: str, mode: Mode) -> None:
        self._logger.info(
            "Ignoring %s trigger while %s (%s)",
            trigger,
            mode.value,
            reason,
        )
