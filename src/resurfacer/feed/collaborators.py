"""
Feed Collaborators
==================
Abstract contracts for the host view the insertion queue runs against.

    - SlotSource: reports the viewport and the foreign items laid out in it
    - Renderer: mounts / unmounts resurfaced items and measures them
    - VisibilityObserver: optional per-element visibility notifications

wait_until_ready() is the fixed-delay retry used while the host view has not
rendered its container yet.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Sequence

from loguru import logger

from resurfacer.core.review import SavedItem

from .geometry import ForeignItem, InsertionSlot, Viewport


class SlotSource(ABC):

    @abstractmethod
    def viewport(self) -> Viewport:
        pass

    @abstractmethod
    def foreign_items(self) -> Sequence[ForeignItem]:
        """Foreign items in document order."""
        pass

    def is_ready(self) -> bool:
        return True


class Renderer(ABC):

    @abstractmethod
    def mount(self, item: SavedItem, slot: InsertionSlot) -> Any:
        """Insert the item immediately before slot.anchor and return a handle to it."""
        pass

    @abstractmethod
    def unmount(self, handle: Any) -> None:
        pass

    @abstractmethod
    def top_of(self, handle: Any) -> float:
        """Document-relative top edge of a mounted item."""
        pass


class VisibilityObserver(ABC):
    """
    Host-side hook for per-element visibility. The host calls
    InsertionQueueManager.on_visibility_exit(item_id) when an observed
    element leaves the viewport.
    """

    @abstractmethod
    def observe(self, item_id: str, handle: Any) -> None:
        pass

    @abstractmethod
    def unobserve(self, item_id: str, handle: Any) -> None:
        pass


async def wait_until_ready(
    source: SlotSource,
    retry_delay: float = 1.0,
    max_attempts: int = 30,
) -> bool:
    """
    Poll source.is_ready() with a fixed delay.

    Returns True once the source reports ready, False when max_attempts
    polls have all failed.
    """
    for attempt in range(1, max_attempts + 1):
        if source.is_ready():
            if attempt > 1:
                logger.debug(f"[SlotSource] Ready after {attempt} attempts")
            return True
        if attempt < max_attempts:
            await asyncio.sleep(retry_delay)
    logger.warning(f"[SlotSource] Not ready after {max_attempts} attempts")
    return False
