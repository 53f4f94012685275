"""Protocols describing runtime-facing trigger capabilities."""

from __future__ import annotations

from typing import Protocol


class TriggerSourceLike(Protocol):
    """Out-of-process trigger mechanism feeding the two trigger channels."""
    def install(self) -> None:
        ...

    def uninstall(self) -> None:
        ...
