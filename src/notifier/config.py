"""Configuration model for the session boundary prompt."""

from __future__ import annotations

from dataclasses import dataclass

PROMPT_PLACEHOLDER = "{prompt}"
DEFAULT_PROMPT_TEMPLATE = "{ending} ended. {starting} time!"
DEFAULT_PROMPT_INPUT = "OK"
DEFAULT_COMMAND: tuple[str, ...] = (
    "dmenu",
    "-nb", "#151515",
    "-nf", "#999999",
    "-sb", "#f00060",
    "-sf", "#000000",
    "-fn", "-*-*-medium-r-normal-*-*-*-*-*-*-100-*-*",
    "-i",
    "-p", PROMPT_PLACEHOLDER,
)


class NotifierConfigurationError(Exception):
    """Raised when notifier configuration is invalid."""


@dataclass(frozen=True)
class NotifierConfig:
    """Validated prompt command derived from app settings."""
    enabled: bool = True
    command: tuple[str, ...] = DEFAULT_COMMAND
    prompt_template: str = DEFAULT_PROMPT_TEMPLATE
    prompt_input: str = DEFAULT_PROMPT_INPUT

    def __post_init__(self) -> None:
        if not self.enabled:
            return
        if not self.command or not self.command[0].strip():
            raise NotifierConfigurationError("notifier.command cannot be empty")
        try:
            self.prompt_template.format(ending="Rest", starting="Pomodoro")
        except (KeyError, IndexError, ValueError) as error:
            raise NotifierConfigurationError(
                f"notifier.prompt_template is invalid: {error}"
            ) from error

    def build_prompt(self, ending: str, starting: str) -> str:
        return self.prompt_template.format(ending=ending, starting=starting)

    def build_args(self, prompt: str) -> list[str]:
        """Substitute the prompt into the command; append it if no placeholder is present."""
        if not any(PROMPT_PLACEHOLDER in arg for arg in self.command):
            return [*self.command, prompt]
        return [arg.replace(PROMPT_PLACEHOLDER, prompt) for arg in self.command]

    @classmethod
    def from_settings(cls, settings) -> "NotifierConfig":
        command = tuple(settings.command) if settings.command else DEFAULT_COMMAND
        template = (settings.prompt_template or "").strip() or DEFAULT_PROMPT_TEMPLATE
        return cls(
            enabled=bool(settings.enabled),
            command=command,
            prompt_template=template,
            prompt_input=settings.prompt_input,
        )
