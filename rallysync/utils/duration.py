"""
Duration parsing for the RallySync planner.

Raw minute/second (and hour) text typed into the planner is normalised here
into non-negative whole seconds. None of these functions raise: anything
that is not a finite, non-negative number counts as zero.
"""
import math
from typing import Optional, Union

RawNumber = Union[str, int, float, None]


def normalize_int(value: RawNumber) -> int:
    """
    Normalise raw user input into a non-negative integer.

    Args:
        value: Text (or a number) entered by the user

    Returns:
        The value truncated toward zero, or 0 for empty, non-numeric,
        non-finite or negative input

    Example:
        >>> normalize_int(" 12 ")
        12
        >>> normalize_int("4.9")
        4
        >>> normalize_int("-3")
        0
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            number = float(text)
        except ValueError:
            return 0
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0

    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)


def to_seconds(minutes: RawNumber, seconds: RawNumber, hours: Optional[RawNumber] = None) -> int:
    """Combine raw hour/minute/second fields into total seconds."""
    return normalize_int(hours) * 3600 + normalize_int(minutes) * 60 + normalize_int(seconds)


def hms_to_seconds(text: Optional[RawNumber]) -> int:
    """
    Parse an ``H:MM:SS`` string into seconds.

    Parts are read left to right as hours, minutes and seconds, so ``"19:30"``
    means 19 hours 30 minutes. Missing or invalid parts count as zero.

    Example:
        >>> hms_to_seconds("1:02:03")
        3723
    """
    if text is None or isinstance(text, bool):
        return 0
    text = str(text).strip()
    if not text:
        return 0
    parts = text.split(":")
    parts += [""] * (3 - len(parts))
    hours, minutes, seconds = parts[:3]
    return to_seconds(minutes, seconds, hours=hours)
