"""
Resurfacer Constants and Enums
==============================
Shared constants and enums for review scheduling and feed insertion.
All durations are integer milliseconds.
"""

from enum import Enum


# ------------------------------------------------------------------ #
#  Durations                                                          #
# ------------------------------------------------------------------ #

ONE_MINUTE: int = 60 * 1000
ONE_DAY: int = 24 * 60 * ONE_MINUTE  # 86_400_000
ONE_YEAR: int = 365 * ONE_DAY  # 31_536_000_000

# Debug mode compresses the schedule so a full cycle fits in a session
DEBUG_ONE_DAY: int = ONE_MINUTE
DEBUG_ONE_YEAR: int = 15 * ONE_MINUTE


# ------------------------------------------------------------------ #
#  Feed insertion                                                     #
# ------------------------------------------------------------------ #

MINIMUM_TWEET_GAP: int = 5  # Minimum foreign items between resurfaced items
SCROLL_THRESHOLD: float = 100.0  # px from bottom that wakes the drain loop
VIEWPORT_BUFFER: float = 2.0  # Screens of look-ahead / look-behind


# ------------------------------------------------------------------ #
#  Enums                                                              #
# ------------------------------------------------------------------ #

class ReviewOutcome(Enum):
    """Result of showing a resurfaced item to the user."""
    POSITIVE = "remembered"
    NEGATIVE = "forgotten"


class RescheduleMode(Enum):
    """Manual due-time overrides from the control panel."""
    TODAY = "today"  # Due right now
    EARLIER = "earlier"  # Halve the remaining wait


__all__ = [
    "ONE_MINUTE",
    "ONE_DAY",
    "ONE_YEAR",
    "DEBUG_ONE_DAY",
    "DEBUG_ONE_YEAR",
    "MINIMUM_TWEET_GAP",
    "SCROLL_THRESHOLD",
    "VIEWPORT_BUFFER",
    "ReviewOutcome",
    "RescheduleMode",
]
