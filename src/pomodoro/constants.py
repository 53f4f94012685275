"""Defaults, trigger names, outcomes, and reason constants used by the session controller."""

from __future__ import annotations

DEFAULT_WORK_SECONDS = 25 * 60
DEFAULT_REST_SECONDS = 5 * 60
DEFAULT_TICK_SECONDS = 1.0

# Names handed to the notifier at session boundaries.
WORK_SESSION_NAME = "Pomodoro"
REST_SESSION_NAME = "Rest"

TRIGGER_STOP_START = "stop_start"
TRIGGER_START = "start"
TRIGGER_STOP = "stop"
TRIGGER_PAUSE_RESUME = "pause_resume"

OUTCOME_COMPLETED = "completed"
OUTCOME_STOPPED = "stopped"

REASON_STARTED = "started"
REASON_STOPPED = "stopped"
REASON_TOGGLED = "toggled"
REASON_NOT_ACTIVE = "not_active"
REASON_ALREADY_ACTIVE = "already_active"
REASON_SHUT_DOWN = "shut_down"
