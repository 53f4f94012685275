"""Parsing of duration strings such as `25m`, `90s`, or `1h30m`."""

from __future__ import annotations

import math
import re
from typing import Union

_UNIT_SECONDS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_PLAIN_NUMBER = re.compile(r"[+-]?(\d+(?:\.\d*)?|\.\d+)")


def parse_duration_seconds(value: Union[str, int, float]) -> float:
    """Convert a duration string or number of seconds into seconds.

    Strings follow the `<number><unit>` sequence format (`1h30m`, `1.5s`,
    `-5s`); a bare number is read as seconds. Raises ValueError for anything
    else, including infinite or NaN values.
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return _finite(float(value), value)
    if not isinstance(value, str):
        raise ValueError(f"invalid duration: {value!r}")

    text = value.strip()
    if not text:
        raise ValueError("duration must not be empty")
    if _PLAIN_NUMBER.fullmatch(text):
        return _finite(float(text), value)

    sign = 1.0
    if text[0] in "+-":
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]

    total = 0.0
    position = 0
    while position < len(text):
        match = _COMPONENT.match(text, position)
        if match is None:
            raise ValueError(f"invalid duration: {value!r}")
        number, unit = match.groups()
        total += float(number) * _UNIT_SECONDS[unit]
        position = match.end()

    if position == 0:
        raise ValueError(f"invalid duration: {value!r}")
    return _finite(sign * total, value)


def _finite(seconds: float, value: object) -> float:
    if not math.isfinite(seconds):
        raise ValueError(f"duration must be finite: {value!r}")
    return seconds
