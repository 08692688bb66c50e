"""
Utility functions for the RallySync rally timing planner.

This module contains time formatting helpers used throughout the application.
All wall-clock output is UTC.
"""
import time
from .constants import ORDINAL_WORDS, SECONDS_PER_DAY


def fmt_mmss(seconds: int) -> str:
    """
    Format seconds as MM:SS string.

    Args:
        seconds: Number of seconds to format (negative values clamp to zero)

    Returns:
        Formatted time string in MM:SS format

    Example:
        >>> fmt_mmss(90)
        '01:30'
        >>> fmt_mmss(3661)
        '61:01'
    """
    seconds = max(0, int(seconds))
    m = seconds // 60
    s = seconds % 60
    return f"{m:02d}:{s:02d}"


def fmt_hms(seconds: int) -> str:
    """
    Format seconds as H:MM:SS string.

    Example:
        >>> fmt_hms(3723)
        '1:02:03'
        >>> fmt_hms(90)
        '0:01:30'
    """
    seconds = max(0, int(seconds))
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    return f"{h}:{m:02d}:{s:02d}"


def fmt_utc_clock(epoch_seconds: int) -> str:
    """Format epoch seconds as an HH:MM:SS UTC wall-clock time of day."""
    t = int(epoch_seconds) % SECONDS_PER_DAY
    return f"{t // 3600:02d}:{t % 3600 // 60:02d}:{t % 60:02d}"


def fmt_signed_seconds(seconds: int) -> str:
    """Format a signed delta such as ``+24s`` or ``-58s``."""
    return f"+{seconds}s" if seconds >= 0 else f"{seconds}s"


def ordinal(n: int) -> str:
    """
    Spell out a 1-based position.

    Example:
        >>> ordinal(2)
        'second'
        >>> ordinal(12)
        '12th'
    """
    if 1 <= n <= len(ORDINAL_WORDS):
        return ORDINAL_WORDS[n - 1]
    return f"{n}th"


def now_ts() -> int:
    """
    Get current timestamp in whole epoch seconds.

    Returns:
        Current time as integer epoch seconds
    """
    return int(time.time())
