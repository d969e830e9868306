"""
Saved Item Library
==================
Caller-side operations over the item store: save, review outcomes, due-time
overrides, removal and listing.

When bound to an InsertionQueueManager, recording an outcome or removing an
item also takes its element out of the feed.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger

from resurfacer.feed.queue import InsertionQueueManager
from resurfacer.storage.base import ItemStore

from .constants import RescheduleMode, ReviewOutcome
from .exceptions import DuplicateItemError, StorageError, ValidationError
from .metrics import REVIEW_OUTCOMES
from .review import ReviewScheduler, SavedItem


class SavedItemLibrary:

    def __init__(
        self,
        store: ItemStore,
        scheduler: Optional[ReviewScheduler] = None,
        manager: Optional[InsertionQueueManager] = None,
    ):
        self.store = store
        self.scheduler = scheduler or ReviewScheduler()
        self.manager = manager

    async def _put(self, item: SavedItem, action: str) -> None:
        try:
            await self.store.put(item)
        except StorageError as exc:
            logger.error(f"[Library] Failed to {action} {item.id}: {exc}")
            raise

    def _release(self, item_id: str) -> None:
        if self.manager is not None:
            self.manager.release(item_id)

    # ---- Save ---------------------------------------------------- #

    async def save(self, item_id: str, payload: Optional[Dict[str, Any]] = None) -> SavedItem:
        """
        Store a new item, first due one day from now.

        Raises:
            ValidationError: If the id is empty.
            DuplicateItemError: If the id is already saved.
        """
        if not item_id or not str(item_id).strip():
            raise ValidationError("item_id", "must not be empty", item_id)
        if await self.store.contains(item_id):
            raise DuplicateItemError(item_id)
        item = self.scheduler.create_item(item_id, payload)
        await self._put(item, "save")
        logger.info(f"[Library] Saved {item_id}, next review at {item.next_review}")
        return item

    # ---- Review outcomes ----------------------------------------- #

    async def mark(self, item_id: str, outcome: ReviewOutcome) -> Optional[SavedItem]:
        """Record a review outcome. Unknown ids are ignored and return None."""
        item = await self.store.get(item_id)
        if item is None:
            logger.warning(f"[Library] Cannot mark unknown item {item_id}")
            return None
        updated = self.scheduler.review(item, outcome)
        await self._put(updated, "update")
        REVIEW_OUTCOMES.labels(outcome=outcome.value).inc()
        self._release(item_id)
        logger.info(
            f"[Library] {item_id} {outcome.value}: interval={updated.interval}ms "
            f"count={updated.review_count}"
        )
        return updated

    async def remember(self, item_id: str) -> Optional[SavedItem]:
        return await self.mark(item_id, ReviewOutcome.POSITIVE)

    async def forget(self, item_id: str) -> Optional[SavedItem]:
        return await self.mark(item_id, ReviewOutcome.NEGATIVE)

    # ---- Due-time overrides -------------------------------------- #

    async def reschedule(self, item_id: str, mode: RescheduleMode) -> Optional[SavedItem]:
        item = await self.store.get(item_id)
        if item is None:
            logger.warning(f"[Library] Cannot reschedule unknown item {item_id}")
            return None
        updated = self.scheduler.reschedule(item, mode)
        if updated is not item:
            await self._put(updated, "reschedule")
        logger.info(f"[Library] {item_id} rescheduled ({mode.value}) to {updated.next_review}")
        return updated

    async def review_today(self, item_id: str) -> Optional[SavedItem]:
        return await self.reschedule(item_id, RescheduleMode.TODAY)

    async def review_earlier(self, item_id: str) -> Optional[SavedItem]:
        return await self.reschedule(item_id, RescheduleMode.EARLIER)

    # ---- Removal ------------------------------------------------- #

    async def remove(self, item_id: str) -> bool:
        try:
            removed = await self.store.delete(item_id)
        except StorageError as exc:
            logger.error(f"[Library] Failed to remove {item_id}: {exc}")
            raise
        self._release(item_id)
        if removed:
            logger.info(f"[Library] Removed {item_id}")
        return removed

    async def clear(self) -> None:
        await self.store.clear()
        if self.manager is not None:
            for item_id in list(self.manager.mounted):
                self.manager.release(item_id)
        logger.info("[Library] Cleared all saved items")

    # ---- Queries ------------------------------------------------- #

    async def get(self, item_id: str) -> Optional[SavedItem]:
        return await self.store.get(item_id)

    async def list_items(self) -> List[SavedItem]:
        """All saved items, soonest due first."""
        items = await self.store.get_all()
        return sorted(items.values(), key=lambda item: (item.next_review, item.id))

    async def due_items(self, now: Optional[int] = None) -> List[SavedItem]:
        now = self.scheduler.clock() if now is None else now
        return [item for item in await self.list_items() if self.scheduler.is_due(item, now)]
