"""Mode enumeration, session state, and immutable result envelopes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional

from .constants import REST_SESSION_NAME, WORK_SESSION_NAME
from .signals import SessionSignals

CountdownOutcome = Literal["completed", "stopped"]
TriggerName = Literal["stop_start", "start", "stop", "pause_resume"]


class Mode(Enum):
    """Controller state."""

    IDLE = "idle"
    WORK = "work"
    REST = "rest"

    @property
    def session_name(self) -> str:
        """Human name used in prompts ("Pomodoro" for work, "Rest" for rest)."""
        if self is Mode.WORK:
            return WORK_SESSION_NAME
        if self is Mode.REST:
            return REST_SESSION_NAME
        return self.value


@dataclass
class Session:
    """One countdown run. Only the engine running it writes `remaining_seconds` and `paused`."""
    kind: Mode
    duration_seconds: int
    signals: SessionSignals = field(default_factory=SessionSignals)
    remaining_seconds: int = field(init=False)
    paused: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        if self.kind is Mode.IDLE:
            raise ValueError("a session must be a work or rest session")
        self.remaining_seconds = int(self.duration_seconds)


@dataclass(frozen=True)
class CountdownResult:
    """How a countdown run ended."""
    outcome: CountdownOutcome
    remaining_seconds: int
    ticks_observed: int

    @property
    def completed(self) -> bool:
        return self.outcome == "completed"


@dataclass(frozen=True)
class ControllerSnapshot:
    """Immutable controller view exposed to the runtime, logs, and tests."""
    mode: Mode
    previous_mode: Mode
    session_kind: Optional[Mode] = None
    remaining_seconds: Optional[int] = None
    paused: bool = False

    @property
    def is_active(self) -> bool:
        return self.mode is not Mode.IDLE


@dataclass(frozen=True)
class TriggerResult:
    """Result envelope returned after the controller processes a trigger."""
    trigger: TriggerName
    accepted: bool
    reason: str
    snapshot: ControllerSnapshot
