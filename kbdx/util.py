"""Utility constants and helpers for kbdx.

Time unit constants represent durations in milliseconds.
These are used throughout the API for consistent time representation.
"""

from time import time as current_time

# Time unit constants (all values in milliseconds)
MS_PER_SECOND = 1000
MS_PER_MINUTE = 60_000
MS_PER_HOUR = 3_600_000
MS_PER_DAY = 86_400_000
MS_PER_YEAR = 31_536_000_000


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(current_time() * 1000)
