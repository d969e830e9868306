"""
Resurfacer Feed Module
======================
Insertion of due items into a live, scrolling feed.
"""

from .geometry import ForeignItem, InsertionSlot, ScrollDirection, ScrollTracker, Viewport
from .collaborators import Renderer, SlotSource, VisibilityObserver, wait_until_ready
from .queue import DrainOutcome, InsertionQueueManager, MountedItem, QueueState

__all__ = [
    "ForeignItem",
    "InsertionSlot",
    "ScrollDirection",
    "ScrollTracker",
    "Viewport",
    "Renderer",
    "SlotSource",
    "VisibilityObserver",
    "wait_until_ready",
    "DrainOutcome",
    "InsertionQueueManager",
    "MountedItem",
    "QueueState",
]
