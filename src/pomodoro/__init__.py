from .constants import (
    DEFAULT_REST_SECONDS,
    DEFAULT_TICK_SECONDS,
    DEFAULT_WORK_SECONDS,
)
from .controller import SessionController
from .countdown import CountdownEngine
from .durations import parse_duration_seconds
from .errors import PomodoroError, SessionInvariantError
from .observer import LoggingSessionObserver, SessionObserver, format_duration
from .signals import SessionEvent, SessionSignals
from .ticker import IntervalTicker, Ticker, TickerFactory, interval_ticker_factory
from .types import (
    ControllerSnapshot,
    CountdownResult,
    Mode,
    Session,
    TriggerResult,
)

__all__ = [
    "DEFAULT_REST_SECONDS",
    "DEFAULT_TICK_SECONDS",
    "DEFAULT_WORK_SECONDS",
    "ControllerSnapshot",
    "CountdownEngine",
    "CountdownResult",
    "IntervalTicker",
    "LoggingSessionObserver",
    "Mode",
    "PomodoroError",
    "Session",
    "SessionController",
    "SessionEvent",
    "SessionInvariantError",
    "SessionObserver",
    "SessionSignals",
    "Ticker",
    "TickerFactory",
    "TriggerResult",
    "format_duration",
    "interval_ticker_factory",
    "parse_duration_seconds",
]
