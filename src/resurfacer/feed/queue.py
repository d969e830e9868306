"""
Insertion Queue Manager
=======================
Decides which due items get physically inserted into a live, scrolling feed,
where, and when.

One manager owns the state for one hosting view:

    pending             due items awaiting insertion, in retrieval order
    occupied_positions  indices among the eligible foreign items already used
    mounted             item_id -> MountedItem for everything currently in the feed
    state               IDLE or DRAINING

Draining inserts at most one item per step; steps are spaced by
QueueConfig.drain_delay_seconds. A refresh replaces the pending queue
wholesale, so items still waiting from the previous scan are dropped.

Public API:
    manager = InsertionQueueManager(source, renderer, observer)
    manager.refresh_due_set(due_items)    # from the due scan
    manager.handle_scroll()               # from the host's scroll event
    manager.on_visibility_exit(item_id)   # from the visibility observer
    manager.on_content_changed()          # host added foreign items
    manager.release(item_id)              # element removed by the user
    await manager.close()
"""

from __future__ import annotations

import asyncio
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Deque, Dict, Iterable, Optional, Sequence, Set

from loguru import logger

from resurfacer.core.config import QueueConfig
from resurfacer.core.metrics import (
    QUEUE_INSERTIONS,
    QUEUE_PENDING,
    QUEUE_RETIREMENTS,
    QUEUE_SKIPS,
)
from resurfacer.core.review import SavedItem

from .collaborators import Renderer, SlotSource, VisibilityObserver
from .geometry import ForeignItem, InsertionSlot, ScrollDirection, ScrollTracker, Viewport


class QueueState(Enum):
    IDLE = "idle"
    DRAINING = "draining"


class DrainOutcome(Enum):
    """Result of a single drain step."""
    EMPTY = "empty"
    DUPLICATE = "duplicate"
    NO_SLOT = "no_slot"
    INSERTED = "inserted"


@dataclass
class MountedItem:
    item_id: str
    position: int
    handle: Any


class InsertionQueueManager:
    """Owns the pending queue and the mounted items of one hosting view."""

    def __init__(
        self,
        slot_source: SlotSource,
        renderer: Renderer,
        observer: Optional[VisibilityObserver] = None,
        config: Optional[QueueConfig] = None,
        auto_drain: bool = True,
    ):
        self.slot_source = slot_source
        self.renderer = renderer
        self.observer = observer
        self.config = config or QueueConfig()
        self.auto_drain = auto_drain

        self.pending: Deque[SavedItem] = deque()
        self.occupied_positions: Set[int] = set()
        self.mounted: Dict[str, MountedItem] = {}
        self.state = QueueState.IDLE

        self._scroll_tracker = ScrollTracker(slot_source.viewport().scroll_y)
        self._drain_task: Optional[asyncio.Task] = None

    @property
    def processing(self) -> bool:
        return self.state is QueueState.DRAINING

    # ---- Due set ------------------------------------------------- #

    def refresh_due_set(self, due_items: Iterable[SavedItem]) -> None:
        """Replace the pending queue with the latest due items."""
        self.pending = deque(due_items)
        QUEUE_PENDING.set(len(self.pending))
        logger.debug(f"[InsertionQueue] Pending set refreshed ({len(self.pending)} due)")
        if self.state is QueueState.IDLE and self.pending:
            self._start_draining()

    # ---- Draining ------------------------------------------------ #

    def _start_draining(self) -> None:
        self.state = QueueState.DRAINING
        if not self.auto_drain:
            return
        if self._drain_task is not None and not self._drain_task.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("[InsertionQueue] No running event loop; drain steps must be driven by the caller")
            return
        self._drain_task = loop.create_task(self._drain_loop(), name="insertion_drain")

    async def _drain_loop(self) -> None:
        while self.state is QueueState.DRAINING:
            try:
                self.drain_step()
            except Exception as exc:
                self.state = QueueState.IDLE
                logger.opt(exception=exc).error(f"[InsertionQueue] Drain step failed: {exc}")
                break
            if self.state is not QueueState.DRAINING:
                break
            await asyncio.sleep(self.config.drain_delay_seconds)

    def drain_step(self) -> DrainOutcome:
        """Process exactly one pending item."""
        if not self.pending:
            self.state = QueueState.IDLE
            return DrainOutcome.EMPTY

        item = self.pending.popleft()
        QUEUE_PENDING.set(len(self.pending))

        if item.id in self.mounted:
            QUEUE_SKIPS.labels(reason="duplicate").inc()
            logger.debug(f"[InsertionQueue] Item {item.id} already in feed, skipping")
            self._settle()
            return DrainOutcome.DUPLICATE

        slot = self.find_slot(self.slot_source.viewport(), self.slot_source.foreign_items())
        if slot is None:
            # Backpressure: the item waits for the next scan, the rest of
            # the queue for the next scroll or content change.
            QUEUE_SKIPS.labels(reason="no_slot").inc()
            logger.debug(
                f"[InsertionQueue] No slot for {item.id}; pausing with {len(self.pending)} pending"
            )
            self.state = QueueState.IDLE
            return DrainOutcome.NO_SLOT

        handle = self.renderer.mount(item, slot)
        self.mounted[item.id] = MountedItem(item.id, slot.position, handle)
        self.occupied_positions.add(slot.position)
        if self.observer is not None:
            self.observer.observe(item.id, handle)

        QUEUE_INSERTIONS.inc()
        logger.info(f"[InsertionQueue] Resurfaced {item.id} at position {slot.position}")
        self._settle()
        return DrainOutcome.INSERTED

    def _settle(self) -> None:
        if not self.pending:
            self.state = QueueState.IDLE

    # ---- Placement ----------------------------------------------- #

    def eligible_candidates(
        self, viewport: Viewport, candidates: Sequence[ForeignItem]
    ) -> list:
        """Foreign items below the top of the viewport and within the look-ahead buffer."""
        limit = viewport.look_ahead_limit(self.config.viewport_buffer)
        return [c for c in candidates if viewport.scroll_y < c.top < limit]

    def find_slot(
        self, viewport: Viewport, candidates: Sequence[ForeignItem]
    ) -> Optional[InsertionSlot]:
        """
        Lowest eligible index that is at least minimum_gap away from every
        occupied position, or None.
        """
        gap = self.config.minimum_gap
        for index, candidate in enumerate(self.eligible_candidates(viewport, candidates)):
            if index in self.occupied_positions:
                continue
            if any(abs(index - used) < gap for used in self.occupied_positions):
                continue
            return InsertionSlot(position=index, anchor=candidate)
        return None

    # ---- Retirement ---------------------------------------------- #

    def _unmount(self, item_id: str, reason: str) -> Optional[MountedItem]:
        mounted = self.mounted.pop(item_id, None)
        if mounted is None:
            return None
        if self.observer is not None:
            self.observer.unobserve(item_id, mounted.handle)
        self.renderer.unmount(mounted.handle)
        self.occupied_positions.discard(mounted.position)
        QUEUE_RETIREMENTS.labels(reason=reason).inc()
        logger.debug(f"[InsertionQueue] Retired {item_id} from position {mounted.position} ({reason})")
        return mounted

    def retire_offscreen(self, viewport: Optional[Viewport] = None) -> int:
        """Unmount every item scrolled past the look-behind buffer. Returns how many."""
        viewport = viewport or self.slot_source.viewport()
        limit = viewport.look_behind_limit(self.config.viewport_buffer)
        stale = [
            item_id for item_id, mounted in self.mounted.items()
            if self.renderer.top_of(mounted.handle) < limit
        ]
        for item_id in stale:
            self._unmount(item_id, reason="offscreen")
        return len(stale)

    def release(self, item_id: str) -> bool:
        """Unmount a specific item and free its position."""
        return self._unmount(item_id, reason="released") is not None

    def on_visibility_exit(self, item_id: str) -> bool:
        mounted = self.mounted.get(item_id)
        if mounted is None:
            return False
        viewport = self.slot_source.viewport()
        if self.renderer.top_of(mounted.handle) >= viewport.look_behind_limit(self.config.viewport_buffer):
            return False
        self._unmount(item_id, reason="not_visible")
        return True

    # ---- Host notifications -------------------------------------- #

    def on_scroll(
        self,
        direction: Optional[ScrollDirection],
        distance_from_bottom: float,
        viewport: Optional[Viewport] = None,
    ) -> None:
        if direction is ScrollDirection.UP:
            self.retire_offscreen(viewport)
        if distance_from_bottom < self.config.scroll_threshold_px:
            self._resume()

    def handle_scroll(self, viewport: Optional[Viewport] = None) -> None:
        viewport = viewport or self.slot_source.viewport()
        direction = self._scroll_tracker.update(viewport.scroll_y)
        self.on_scroll(direction, viewport.distance_from_bottom, viewport)

    def on_content_changed(self) -> None:
        self._resume()

    def _resume(self) -> None:
        if self.state is QueueState.IDLE and self.pending:
            logger.debug(f"[InsertionQueue] Resuming drain with {len(self.pending)} pending")
            self._start_draining()

    # ---- Lifecycle ----------------------------------------------- #

    async def close(self) -> None:
        self.state = QueueState.IDLE
        if self._drain_task and not self._drain_task.done():
            self._drain_task.cancel()
            try:
                await self._drain_task
            except asyncio.CancelledError:
                pass
        self._drain_task = None
        for item_id in list(self.mounted):
            self._unmount(item_id, reason="closed")
        self.pending.clear()
        QUEUE_PENDING.set(0)
        logger.info("[InsertionQueue] Closed")

    def snapshot(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "pending": len(self.pending),
            "occupied": sorted(self.occupied_positions),
            "mounted": len(self.mounted),
        }
