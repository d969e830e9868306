"""
Tests for the geometric-interval review scheduler.
==================================================
Covers:
  - Item creation
  - Positive / negative review transitions and the one-year clamp
  - "Review today" and "review earlier" overrides
  - Due checks
  - Debug-mode interval bounds
"""

import pytest

from resurfacer.core.config import SchedulingConfig
from resurfacer.core.review import (
    DEBUG_ONE_DAY,
    DEBUG_ONE_YEAR,
    ONE_DAY,
    ONE_YEAR,
    RescheduleMode,
    ReviewOutcome,
    ReviewScheduler,
    SavedItem,
)

HOUR = 60 * 60 * 1000


# =====================================================================
# Creation
# =====================================================================

class TestCreateItem:

    def test_new_item_is_due_in_one_day(self, scheduler, clock):
        item = scheduler.create_item("1789", {"text": "hello"})
        assert item.id == "1789"
        assert item.interval == ONE_DAY
        assert item.next_review == clock.now + ONE_DAY
        assert item.last_reviewed is None
        assert item.review_count == 0
        assert item.payload == {"text": "hello"}

    def test_payload_is_copied(self, scheduler):
        payload = {"text": "hello"}
        item = scheduler.create_item("1", payload)
        payload["text"] = "changed"
        assert item.payload["text"] == "hello"


# =====================================================================
# Review outcomes
# =====================================================================

class TestReview:

    def test_positive_review_walkthrough(self, scheduler, clock):
        """Created at 0, remembered one day later."""
        item = scheduler.create_item("a", {})
        assert item.interval == 86_400_000
        assert item.next_review == 86_400_000

        clock.now = 86_400_000
        item = scheduler.review(item, ReviewOutcome.POSITIVE)
        assert item.interval == 172_800_000
        assert item.next_review == 259_200_000
        assert item.last_reviewed == 86_400_000
        assert item.review_count == 1

    def test_positive_review_clamps_to_one_year(self, scheduler):
        item = SavedItem(id="a", next_review=0, interval=172_800_000 * 10_000)
        item = scheduler.review(item, ReviewOutcome.POSITIVE)
        assert item.interval == 31_536_000_000

    def test_repeated_positives_converge_to_one_year(self, scheduler):
        item = scheduler.create_item("a", {})
        for _ in range(20):
            item = scheduler.review(item, ReviewOutcome.POSITIVE)
            assert item.interval <= ONE_YEAR
        assert item.interval == ONE_YEAR
        assert item.review_count == 20

        item = scheduler.review(item, ReviewOutcome.POSITIVE)
        assert item.interval == ONE_YEAR

    def test_negative_review_resets(self, scheduler, clock):
        item = SavedItem(id="a", next_review=0, interval=16 * ONE_DAY, review_count=4)
        clock.now = 5_000
        item = scheduler.review(item, ReviewOutcome.NEGATIVE)
        assert item.interval == ONE_DAY
        assert item.review_count == 0
        assert item.last_reviewed == 5_000
        assert item.next_review == 5_000 + ONE_DAY

    def test_review_returns_new_record(self, scheduler):
        item = scheduler.create_item("a", {"text": "x"})
        reviewed = scheduler.review(item, ReviewOutcome.POSITIVE)
        assert reviewed is not item
        assert item.review_count == 0
        assert reviewed.payload == {"text": "x"}

    def test_next_review_follows_last_reviewed(self, scheduler, clock):
        item = scheduler.create_item("a", {})
        for step, outcome in enumerate([ReviewOutcome.POSITIVE, ReviewOutcome.NEGATIVE, ReviewOutcome.POSITIVE]):
            clock.advance(HOUR * (step + 1))
            item = scheduler.review(item, outcome)
            assert item.next_review == item.last_reviewed + item.interval


# =====================================================================
# Manual overrides
# =====================================================================

class TestReschedule:

    def test_reschedule_to_now(self, scheduler, clock):
        item = SavedItem(id="a", next_review=10 * HOUR, interval=4 * ONE_DAY, review_count=2)
        clock.now = HOUR
        updated = scheduler.reschedule_to_now(item)
        assert updated.next_review == HOUR
        assert updated.interval == item.interval
        assert updated.review_count == item.review_count
        assert updated.last_reviewed == item.last_reviewed

    def test_reschedule_earlier_halves_remaining_wait(self, scheduler, clock):
        item = SavedItem(id="a", next_review=8 * HOUR)
        item = scheduler.reschedule_earlier(item)
        assert item.next_review == 4 * HOUR
        item = scheduler.reschedule_earlier(item)
        assert item.next_review == 2 * HOUR
        item = scheduler.reschedule_earlier(item)
        assert item.next_review == HOUR

    def test_reschedule_earlier_leaves_due_item_alone(self, scheduler, clock):
        clock.now = 10 * HOUR
        item = SavedItem(id="a", next_review=9 * HOUR)
        assert scheduler.reschedule_earlier(item) is item

    def test_reschedule_dispatches_by_mode(self, scheduler, clock):
        item = SavedItem(id="a", next_review=8 * HOUR)
        assert scheduler.reschedule(item, RescheduleMode.TODAY).next_review == 0
        assert scheduler.reschedule(item, RescheduleMode.EARLIER).next_review == 4 * HOUR


# =====================================================================
# Queries
# =====================================================================

class TestDue:

    def test_is_due_boundary(self):
        item = SavedItem(id="a", next_review=1_000)
        assert not ReviewScheduler.is_due(item, 999)
        assert ReviewScheduler.is_due(item, 1_000)
        assert ReviewScheduler.is_due(item, 1_001)

    @pytest.mark.parametrize("t1,t2", [(0, 5), (999, 1_000), (1_000, 50_000)])
    def test_is_due_is_monotonic(self, t1, t2):
        item = SavedItem(id="a", next_review=1_000)
        if ReviewScheduler.is_due(item, t1):
            assert ReviewScheduler.is_due(item, t2)

    def test_time_until_due(self):
        item = SavedItem(id="a", next_review=1_000)
        assert ReviewScheduler.time_until_due(item, 400) == 600
        assert ReviewScheduler.time_until_due(item, 1_400) == -400


# =====================================================================
# Debug mode
# =====================================================================

class TestDebugMode:

    def test_debug_bounds(self, clock):
        scheduler = ReviewScheduler(SchedulingConfig(debug_mode=True), clock=clock)
        item = scheduler.create_item("a", {})
        assert item.interval == DEBUG_ONE_DAY
        assert item.next_review == DEBUG_ONE_DAY

        for _ in range(10):
            item = scheduler.review(item, ReviewOutcome.POSITIVE)
        assert item.interval == DEBUG_ONE_YEAR

        item = scheduler.review(item, ReviewOutcome.NEGATIVE)
        assert item.interval == DEBUG_ONE_DAY
