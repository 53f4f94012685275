class PomodoroError(Exception):
    """Base exception for the pomodoro session core."""


class SessionInvariantError(PomodoroError):
    """Raised when controller state reaches a combination no trigger can produce."""
