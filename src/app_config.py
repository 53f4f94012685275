from __future__ import annotations

import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes
    import tomli as tomllib  # type: ignore

from app_config_parser import parse_app_config, parse_log_level
from app_config_schema import (
    CONFIG_FILE_ENV,
    DEFAULT_CONFIG_FILE,
    AppConfig,
    AppConfigurationError,
    LoggingSettings,
    NotifierSettings,
    TimerSettings,
    TriggerSettings,
)
from pomodoro.durations import parse_duration_seconds

__all__ = [
    "AppConfig",
    "AppConfigurationError",
    "LoggingSettings",
    "NotifierSettings",
    "TimerSettings",
    "TriggerSettings",
    "apply_overrides",
    "load_app_config",
    "parse_log_level",
    "resolve_config_path",
]


def resolve_config_path(
    config_path: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Path:
    env = environ if environ is not None else os.environ
    raw = config_path or env.get(CONFIG_FILE_ENV, "").strip() or DEFAULT_CONFIG_FILE
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    return path


def load_app_config(
    config_path: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load `config.toml`, falling back to defaults when no file was requested or found."""
    env = environ if environ is not None else os.environ
    explicit = bool(config_path or env.get(CONFIG_FILE_ENV, "").strip())
    path = resolve_config_path(config_path, environ=env)
    if not path.exists():
        if explicit:
            raise AppConfigurationError(f"Config file not found: {path}")
        return AppConfig()
    if not path.is_file():
        raise AppConfigurationError(f"Config path is not a file: {path}")

    try:
        with open(path, "rb") as fh:
            raw = tomllib.load(fh)
    except Exception as error:
        raise AppConfigurationError(f"Failed to parse config TOML: {error}") from error

    if not isinstance(raw, Mapping):
        raise AppConfigurationError("Root config TOML object must be a table.")

    return parse_app_config(raw, base_dir=path.parent, source_file=str(path))


def apply_overrides(
    config: AppConfig,
    *,
    work: Any = None,
    rest: Any = None,
    log_level: str | None = None,
) -> AppConfig:
    """Return a copy of `config` with command line values taking precedence."""
    timer = config.timer
    if work is not None:
        timer = replace(timer, work_seconds=_override_duration(work, "--ptime"))
    if rest is not None:
        timer = replace(timer, rest_seconds=_override_duration(rest, "--rtime"))

    logging_settings = config.logging
    if log_level is not None:
        parse_log_level(log_level, "--log-level")
        logging_settings = LoggingSettings(level=log_level.strip().upper())

    return replace(config, timer=timer, logging=logging_settings)


def _override_duration(value: Any, flag: str) -> float:
    try:
        return parse_duration_seconds(value)
    except ValueError as error:
        raise AppConfigurationError(
            f"{flag} must be a duration such as '25m' or a number of seconds."
        ) from error
