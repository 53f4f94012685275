"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pomodoro.constants import (
    DEFAULT_REST_SECONDS,
    DEFAULT_TICK_SECONDS,
    DEFAULT_WORK_SECONDS,
)

DEFAULT_CONFIG_FILE = "config.toml"
CONFIG_FILE_ENV = "POMODORO_CONFIG_FILE"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettings:
    """Session lengths and tick granularity from `[timer]`."""
    work_seconds: float = float(DEFAULT_WORK_SECONDS)
    rest_seconds: float = float(DEFAULT_REST_SECONDS)
    tick_seconds: float = DEFAULT_TICK_SECONDS


@dataclass(frozen=True)
class NotifierSettings:
    """Session boundary prompt settings from `[notifier]`."""
    enabled: bool = True
    command: tuple[str, ...] = ()
    prompt_template: str = ""
    prompt_input: str = "OK"


@dataclass(frozen=True)
class TriggerSettings:
    """Signal names bound to the two trigger channels from `[triggers]`."""
    stop_start_signal: str = "SIGUSR1"
    pause_resume_signal: str = "SIGUSR2"


@dataclass(frozen=True)
class LoggingSettings:
    """Log verbosity from `[logging]`."""
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration; `source_file` is None when defaults are used."""
    timer: TimerSettings = TimerSettings()
    notifier: NotifierSettings = NotifierSettings()
    triggers: TriggerSettings = TriggerSettings()
    logging: LoggingSettings = LoggingSettings()
    source_file: Optional[str] = None
