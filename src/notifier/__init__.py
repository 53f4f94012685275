"""Public exports for session boundary notifiers."""

from .command import CommandNotifier, NotifierError, NullNotifier
from .config import NotifierConfig, NotifierConfigurationError

__all__ = [
    "CommandNotifier",
    "NotifierConfig",
    "NotifierConfigurationError",
    "NotifierError",
    "NullNotifier",
]
