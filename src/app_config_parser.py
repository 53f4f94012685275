"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    LoggingSettings,
    NotifierSettings,
    TimerSettings,
    TriggerSettings,
)
from pomodoro.durations import parse_duration_seconds

_ALLOWED_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: Optional[str],
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    return AppConfig(
        timer=_parse_timer_settings(_section(raw, "timer")),
        notifier=_parse_notifier_settings(_section(raw, "notifier"), base_dir=base_dir),
        triggers=_parse_trigger_settings(_section(raw, "triggers")),
        logging=_parse_logging_settings(_section(raw, "logging")),
        source_file=source_file,
    )


def parse_log_level(value: Any, field: str = "logging.level") -> int:
    """Map a level name such as `info` to its `logging` constant."""
    name = _as_log_level(value, field)
    return logging.getLevelName(name)


def _parse_timer_settings(section: Mapping[str, Any]) -> TimerSettings:
    defaults = TimerSettings()
    tick_seconds = _as_duration(
        section.get("tick_seconds", defaults.tick_seconds),
        "timer.tick_seconds",
    )
    if tick_seconds <= 0:
        raise AppConfigurationError("timer.tick_seconds must be greater than zero.")

    return TimerSettings(
        work_seconds=_as_duration(
            section.get("work", defaults.work_seconds),
            "timer.work",
        ),
        rest_seconds=_as_duration(
            section.get("rest", defaults.rest_seconds),
            "timer.rest",
        ),
        tick_seconds=tick_seconds,
    )


def _parse_notifier_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> NotifierSettings:
    command = _as_str_list(section.get("command", []), "notifier.command")
    if command and ("/" in command[0] or command[0].startswith("~")):
        command[0] = _resolve_path(base_dir, command[0])

    return NotifierSettings(
        enabled=_as_bool(section.get("enabled", True), "notifier.enabled"),
        command=tuple(command),
        prompt_template=_as_str(
            section.get("prompt_template", ""),
            "notifier.prompt_template",
        ),
        prompt_input=_as_str(section.get("prompt_input", "OK"), "notifier.prompt_input"),
    )


def _parse_trigger_settings(section: Mapping[str, Any]) -> TriggerSettings:
    defaults = TriggerSettings()
    return TriggerSettings(
        stop_start_signal=_as_str(
            section.get("stop_start_signal", defaults.stop_start_signal),
            "triggers.stop_start_signal",
        ),
        pause_resume_signal=_as_str(
            section.get("pause_resume_signal", defaults.pause_resume_signal),
            "triggers.pause_resume_signal",
        ),
    )


def _parse_logging_settings(section: Mapping[str, Any]) -> LoggingSettings:
    return LoggingSettings(
        level=_as_log_level(section.get("level", "INFO"), "logging.level"),
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_str_list(value: Any, field: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        # A single string is a command without arguments.
        text = value.strip()
        return [text] if text else []
    if isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if not isinstance(item, str):
                raise AppConfigurationError(f"{field} must be a list of strings.")
            items.append(item)
        return items
    raise AppConfigurationError(f"{field} must be a list of strings.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_duration(value: Any, field: str) -> float:
    try:
        return parse_duration_seconds(value)
    except ValueError as error:
        raise AppConfigurationError(
            f"{field} must be a duration such as '25m' or a number of seconds."
        ) from error


def _as_log_level(value: Any, field: str) -> str:
    name = _as_str(value, field).upper()
    if name not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(_ALLOWED_LOG_LEVELS)
        raise AppConfigurationError(f"{field} must be one of: {allowed}.")
    return name


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
