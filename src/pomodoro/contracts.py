"""Protocols describing collaborators the session controller calls out to."""

from __future__ import annotations

from typing import Protocol


class NotifierLike(Protocol):
    """Best-effort announcement of a session boundary."""
    def notify(self, ending: str, starting: str) -> None:
        ...
