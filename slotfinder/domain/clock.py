"""
Conversion between "HH:MM" wall-clock strings and minute offsets.

All interval arithmetic works on minutes since 00:00; strings only appear
at the edges.
"""

import re
from typing import Any

from .exceptions import TimeParseError

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):([0-5]\d)$")


def time_to_minutes(value: str) -> int:
    """
    Convert a time in H:MM or HH:MM format to minutes since midnight.

    The hour is not bounded, so "24:00" yields 1440.

    Raises:
        TimeParseError: If the value is not a well-formed clock string
    """
    if not isinstance(value, str):
        raise TimeParseError(f"Expected a time string in HH:MM format, got {value!r}")

    match = _CLOCK_PATTERN.match(value)
    if match is None:
        raise TimeParseError(f"Invalid time '{value}', expected HH:MM")

    hours, minutes = (int(part) for part in match.groups())
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight back to a zero-padded HH:MM string."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def clock_value_to_time(value: Any) -> Any:
    """
    Normalise a clock value read from YAML.

    PyYAML loads unquoted ``10:30`` as the base-60 integer 630, which is
    exactly the minute offset, so integers are formatted back to HH:MM.
    Other values pass through unchanged.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return minutes_to_time(value)
    return value
