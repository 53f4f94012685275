"""External trigger channels for stop/start and pause/resume."""

from .config import (
    DEFAULT_PAUSE_RESUME_SIGNAL,
    DEFAULT_STOP_START_SIGNAL,
    TriggerConfig,
    TriggerConfigurationError,
    resolve_signal,
)
from .listener import TriggerListener
from .signals import SignalTriggerSource

__all__ = [
    "DEFAULT_PAUSE_RESUME_SIGNAL",
    "DEFAULT_STOP_START_SIGNAL",
    "SignalTriggerSource",
    "TriggerConfig",
    "TriggerConfigurationError",
    "TriggerListener",
    "resolve_signal",
]
