"""
Review Package
==============
Geometric-interval spaced repetition for saved posts.

Core Components:
    - SavedItem: persisted review state plus opaque display payload
    - ReviewScheduler: pure interval / due-date transitions
    - ReviewOutcome, RescheduleMode: review results and manual overrides

Usage:
    from resurfacer.core.review import ReviewScheduler, ReviewOutcome

    scheduler = ReviewScheduler()
    item = scheduler.create_item("1789", payload)
    item = scheduler.review(item, ReviewOutcome.NEGATIVE)
"""

from ..constants import (
    ONE_MINUTE,
    ONE_DAY,
    ONE_YEAR,
    DEBUG_ONE_DAY,
    DEBUG_ONE_YEAR,
    MINIMUM_TWEET_GAP,
    SCROLL_THRESHOLD,
    VIEWPORT_BUFFER,
    ReviewOutcome,
    RescheduleMode,
)
from .item import SavedItem
from .scheduler import Clock, ReviewScheduler, now_ms


__all__ = [
    # Constants
    "ONE_MINUTE",
    "ONE_DAY",
    "ONE_YEAR",
    "DEBUG_ONE_DAY",
    "DEBUG_ONE_YEAR",
    "MINIMUM_TWEET_GAP",
    "SCROLL_THRESHOLD",
    "VIEWPORT_BUFFER",
    # Enums
    "ReviewOutcome",
    "RescheduleMode",
    # Core components
    "SavedItem",
    "ReviewScheduler",
    "Clock",
    "now_ms",
]
