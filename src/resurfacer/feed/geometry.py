"""
Feed Geometry
=============
Plain value types describing the hosting view: the viewport, the foreign
items currently laid out in it, and the slot a resurfaced item is mounted at.

All coordinates are document pixels, measured from the top of the document.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class Viewport:
    scroll_y: float
    inner_height: float
    document_height: float = 0.0

    @property
    def viewport_bottom(self) -> float:
        return self.scroll_y + self.inner_height

    @property
    def distance_from_bottom(self) -> float:
        """Pixels left between the bottom of the viewport and the end of the document."""
        return self.document_height - self.viewport_bottom

    def look_ahead_limit(self, buffer: float) -> float:
        return self.viewport_bottom + self.inner_height * buffer

    def look_behind_limit(self, buffer: float) -> float:
        return self.scroll_y - self.inner_height * buffer


@dataclass(frozen=True)
class ForeignItem:
    """A piece of the host's own content that a resurfaced item may be placed before."""
    key: Any
    top: float


@dataclass(frozen=True)
class InsertionSlot:
    position: int
    anchor: ForeignItem


class ScrollDirection(Enum):
    UP = "up"
    DOWN = "down"


class ScrollTracker:
    """Derives the scroll direction from consecutive scroll positions."""

    def __init__(self, initial_scroll_y: float = 0.0):
        self.last_scroll_y = initial_scroll_y

    def update(self, scroll_y: float) -> Optional[ScrollDirection]:
        previous = self.last_scroll_y
        self.last_scroll_y = scroll_y
        if scroll_y < previous:
            return ScrollDirection.UP
        if scroll_y > previous:
            return ScrollDirection.DOWN
        return None
