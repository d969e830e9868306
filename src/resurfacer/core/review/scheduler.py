"""
Review Scheduler - Geometric Interval Spaced Repetition
=======================================================
Pure state transitions over a SavedItem.

A remembered item waits twice as long before it comes back, up to a year.
A forgotten item starts over at one day. The scheduler holds no state of
its own: every operation returns a new record and never touches a store.

    interval' = min(interval * 2, ONE_YEAR)   on POSITIVE
    interval' = ONE_DAY                       on NEGATIVE
    next_review' = now + interval'
"""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Any, Callable, Dict, Optional

from ..config import SchedulingConfig
from ..constants import RescheduleMode, ReviewOutcome
from .item import SavedItem

Clock = Callable[[], int]


def now_ms() -> int:
    """Wall-clock time in integer milliseconds since the epoch."""
    return int(time.time() * 1000)


class ReviewScheduler:
    """
    Computes intervals and due timestamps for saved items.

    Usage:
        scheduler = ReviewScheduler()
        item = scheduler.create_item("1789", {"text": "..."})
        item = scheduler.review(item, ReviewOutcome.POSITIVE)
        scheduler.is_due(item, now_ms())
    """

    def __init__(
        self,
        config: Optional[SchedulingConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or SchedulingConfig()
        self.clock: Clock = clock or now_ms

    @property
    def one_day(self) -> int:
        return self.config.one_day

    @property
    def one_year(self) -> int:
        return self.config.one_year

    def _clamp(self, interval: int) -> int:
        return max(self.one_day, min(interval, self.one_year))

    # ---- Lifecycle ------------------------------------------------ #

    def create_item(self, item_id: str, payload: Optional[Dict[str, Any]] = None) -> SavedItem:
        """New record, first due one day from now and never reviewed."""
        now = self.clock()
        return SavedItem(
            id=item_id,
            payload=dict(payload or {}),
            interval=self.one_day,
            next_review=now + self.one_day,
            last_reviewed=None,
            review_count=0,
        )

    # ---- Review outcomes ------------------------------------------ #

    def review(self, item: SavedItem, outcome: ReviewOutcome) -> SavedItem:
        """
        Apply a review outcome.

        POSITIVE doubles the interval (clamped to one year) and bumps the
        review count. NEGATIVE resets both. Either way the item is next due
        one interval after now.
        """
        now = self.clock()
        if outcome is ReviewOutcome.POSITIVE:
            review_count = item.review_count + 1
            interval = self._clamp(int(item.interval) * 2)
        else:
            review_count = 0
            interval = self.one_day

        return replace(
            item,
            interval=interval,
            review_count=review_count,
            last_reviewed=now,
            next_review=now + interval,
        )

    # ---- Manual overrides ----------------------------------------- #

    def reschedule_to_now(self, item: SavedItem) -> SavedItem:
        """Review today: due immediately, interval and count untouched."""
        return replace(item, next_review=self.clock())

    def reschedule_earlier(self, item: SavedItem) -> SavedItem:
        """Review earlier: halve the remaining wait. Already-due items are unchanged."""
        now = self.clock()
        remaining = item.next_review - now
        if remaining <= 0:
            return item
        return replace(item, next_review=now + remaining // 2)

    def reschedule(self, item: SavedItem, mode: RescheduleMode) -> SavedItem:
        if mode is RescheduleMode.TODAY:
            return self.reschedule_to_now(item)
        return self.reschedule_earlier(item)

    # ---- Queries --------------------------------------------------- #

    @staticmethod
    def is_due(item: SavedItem, now: int) -> bool:
        return item.next_review <= now

    @staticmethod
    def time_until_due(item: SavedItem, now: int) -> int:
        """Milliseconds until the item is due (negative if overdue)."""
        return item.next_review - now


__all__ = ["ReviewScheduler", "Clock", "now_ms"]
