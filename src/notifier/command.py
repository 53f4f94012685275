"""Prompt notifiers announcing the end of a work or rest session."""

from __future__ import annotations

import logging
import subprocess
import threading
from typing import Callable, Optional

from .config import NotifierConfig

CommandRunner = Callable[..., subprocess.CompletedProcess]


class NotifierError(Exception):
    """Raised when a prompt cannot be launched."""


class CommandNotifier:
    """Runs an external prompt program (dmenu by default) at session boundaries.

    The child process runs on a daemon thread so the caller never waits for
    the user to acknowledge the prompt. Its exit status is only logged. Only
    one prompt is open at a time; boundaries reached while it is still open
    are skipped.
    """

    def __init__(
        self,
        config: NotifierConfig,
        *,
        runner: Optional[CommandRunner] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._runner = runner or subprocess.run
        self._logger = logger or logging.getLogger("notifier")
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    def notify(self, ending: str, starting: str) -> None:
        prompt = self._config.build_prompt(ending, starting)
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                self._logger.info("Previous prompt still open; skipping: %s", prompt)
                return

            args = self._config.build_args(prompt)
            self._logger.info("Prompting user: %s", prompt)
            try:
                thread = threading.Thread(
                    target=self._run_prompt,
                    args=(args,),
                    daemon=True,
                    name="session-prompt",
                )
                thread.start()
            except RuntimeError as error:
                raise NotifierError(f"Failed to launch prompt: {error}") from error
            self._thread = thread

    @property
    def is_prompting(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def wait(self, timeout_seconds: Optional[float] = None) -> None:
        """Block until the most recent prompt process has exited."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout=timeout_seconds)

    def _run_prompt(self, args: list[str]) -> None:
        try:
            completed = self._runner(
                args,
                input=self._config.prompt_input.encode("utf-8"),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as error:
            self._logger.warning("Prompt command %r failed: %s", args[0], error)
            return

        if completed.returncode != 0:
            self._logger.debug(
                "Prompt command %r exited with status %s",
                args[0],
                completed.returncode,
            )


class NullNotifier:
    """Notifier used when prompts are disabled; only logs the boundary."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("notifier")

    def notify(self, ending: str, starting: str) -> None:
        self._logger.info("%s ended, %s starting (prompt disabled)", ending, starting)
