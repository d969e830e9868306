"""
Due Scan Loop
=============
Periodic trigger that finds due items and hands them to the insertion queue.

Each tick reads every saved item from the store, keeps the ones whose
next_review has passed and replaces the queue manager's pending set with
them. Before the first tick the loop waits for the host view to report
ready, then gives it a short head start.

Public API:
    loop = DueScanLoop(store, scheduler, manager, slot_source)
    await loop.start()   # background task
    await loop.tick()    # single on-demand scan
    await loop.stop()
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Optional

from loguru import logger

from resurfacer.feed.collaborators import SlotSource, wait_until_ready
from resurfacer.feed.queue import InsertionQueueManager
from resurfacer.storage.base import ItemStore

from .config import DueScanConfig
from .exceptions import StorageError
from .metrics import DUE_ITEMS
from .review import ReviewScheduler, SavedItem


class DueScanLoop:
    """Background polling of the item store for due items."""

    def __init__(
        self,
        store: ItemStore,
        scheduler: ReviewScheduler,
        manager: InsertionQueueManager,
        slot_source: Optional[SlotSource] = None,
        config: Optional[DueScanConfig] = None,
    ):
        self.store = store
        self.scheduler = scheduler
        self.manager = manager
        self.slot_source = slot_source or manager.slot_source
        self.cfg = config or DueScanConfig()
        self._task: Optional[asyncio.Task] = None
        self._running = False
        self.last_scan: Optional[datetime] = None
        self.stats: Dict[str, int] = {
            "scans": 0,
            "skipped": 0,
            "due_found": 0,
        }

    @property
    def running(self) -> bool:
        return self._running

    # ---- Lifecycle ----------------------------------------------- #

    async def start(self) -> None:
        if not self.cfg.enabled:
            logger.info("[DueScan] Disabled by config.")
            return
        if self._task is not None and not self._task.done():
            return
        self._running = True
        self._task = asyncio.create_task(self._loop(), name="due_scan_loop")
        logger.info(f"[DueScan] Started - scan every {self.cfg.interval_seconds}s")

    async def stop(self) -> None:
        self._running = False
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("[DueScan] Stopped.")

    # ---- Main loop ----------------------------------------------- #

    async def _loop(self) -> None:
        ready = await wait_until_ready(
            self.slot_source,
            retry_delay=self.cfg.ready_retry_delay_seconds,
            max_attempts=self.cfg.ready_max_attempts,
        )
        if not ready:
            logger.error("[DueScan] Host view never became ready; not scanning.")
            self._running = False
            return

        await asyncio.sleep(self.cfg.initial_delay_seconds)
        while self._running:
            try:
                await self.tick()
            except asyncio.CancelledError:
                break
            except Exception as exc:
                logger.opt(exception=exc).error(f"[DueScan] Scan error: {exc}")
            await asyncio.sleep(self.cfg.interval_seconds)

    # ---- Scan ---------------------------------------------------- #

    def select_due(self, items: Dict[str, SavedItem], now: int) -> List[SavedItem]:
        return [item for item in items.values() if self.scheduler.is_due(item, now)]

    async def tick(self) -> int:
        """Run one scan. Returns the number of due items handed to the queue."""
        try:
            items = await self.store.get_all()
        except StorageError as exc:
            self.stats["skipped"] += 1
            logger.warning(f"[DueScan] Store unavailable, skipping scan: {exc}")
            return 0

        due = self.select_due(items, self.scheduler.clock())
        self.manager.refresh_due_set(due)

        self.last_scan = datetime.now(timezone.utc)
        self.stats["scans"] += 1
        self.stats["due_found"] += len(due)
        DUE_ITEMS.set(len(due))
        logger.debug(f"[DueScan] {len(due)} of {len(items)} saved items due")
        return len(due)
