"""Configuration model for the OS signals bound to the two trigger channels."""

from __future__ import annotations

import signal
from dataclasses import dataclass


class TriggerConfigurationError(Exception):
    """Raised when trigger configuration is invalid."""


DEFAULT_STOP_START_SIGNAL = "SIGUSR1"
DEFAULT_PAUSE_RESUME_SIGNAL = "SIGUSR2"

# Reserved for shutdown or impossible to catch.
_RESERVED_SIGNALS = frozenset({"SIGINT", "SIGTERM", "SIGKILL", "SIGSTOP"})


def resolve_signal(name: str) -> signal.Signals:
    """Map a signal name such as `SIGUSR1` or `usr1` onto `signal.Signals`."""
    normalized = name.strip().upper()
    if normalized and not normalized.startswith("SIG"):
        normalized = f"SIG{normalized}"
    if normalized in _RESERVED_SIGNALS:
        raise TriggerConfigurationError(f"{normalized} cannot be used as a trigger")
    try:
        return signal.Signals[normalized]
    except KeyError as error:
        raise TriggerConfigurationError(f"Unknown signal: {name!r}") from error


@dataclass(frozen=True)
class TriggerConfig:
    """Validated signal bindings derived from app settings."""
    stop_start_signal: signal.Signals
    pause_resume_signal: signal.Signals

    def __post_init__(self) -> None:
        if self.stop_start_signal == self.pause_resume_signal:
            raise TriggerConfigurationError(
                "stop/start and pause/resume must use different signals, "
                f"both are {self.stop_start_signal.name}"
            )

    @classmethod
    def from_settings(cls, settings) -> "TriggerConfig":
        return cls(
            stop_start_signal=resolve_signal(
                settings.stop_start_signal or DEFAULT_STOP_START_SIGNAL
            ),
            pause_resume_signal=resolve_signal(
                settings.pause_resume_signal or DEFAULT_PAUSE_RESUME_SIGNAL
            ),
        )
