"""
Fake Feed Host
==============
A scrollable column of foreign items plus a renderer that records what it
mounted, for exercising the insertion queue without a real view.
"""

from typing import Any, Dict, List, Optional, Tuple

from resurfacer.core.review import SavedItem
from resurfacer.feed.collaborators import Renderer, SlotSource, VisibilityObserver
from resurfacer.feed.geometry import ForeignItem, InsertionSlot, Viewport


class FakeClock:
    """Callable millisecond clock that only moves when told to."""

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeSlotSource(SlotSource):

    def __init__(
        self,
        items: Optional[List[ForeignItem]] = None,
        scroll_y: float = 0.0,
        inner_height: float = 1000.0,
        document_height: float = 10000.0,
        ready_after: int = 0,
    ):
        self.items = list(items or [])
        self.scroll_y = scroll_y
        self.inner_height = inner_height
        self.document_height = document_height
        # Number of is_ready() polls that report False before the view appears
        self.ready_after = ready_after
        self.ready_polls = 0

    @classmethod
    def with_rows(cls, count: int, spacing: float = 100.0, start: float = 50.0, **kwargs) -> "FakeSlotSource":
        items = [ForeignItem(key=f"post-{i}", top=start + i * spacing) for i in range(count)]
        return cls(items, **kwargs)

    def scroll_to(self, scroll_y: float) -> Viewport:
        self.scroll_y = scroll_y
        return self.viewport()

    def viewport(self) -> Viewport:
        return Viewport(self.scroll_y, self.inner_height, self.document_height)

    def foreign_items(self) -> List[ForeignItem]:
        return list(self.items)

    def is_ready(self) -> bool:
        self.ready_polls += 1
        return self.ready_polls > self.ready_after


class FakeRenderer(Renderer):
    """Mounted items sit at their anchor's top edge."""

    def __init__(self):
        self.mounted: Dict[str, Tuple[SavedItem, InsertionSlot]] = {}
        self.tops: Dict[str, float] = {}
        self.unmounted: List[str] = []

    def mount(self, item: SavedItem, slot: InsertionSlot) -> Any:
        handle = f"el-{item.id}"
        self.mounted[handle] = (item, slot)
        self.tops[handle] = slot.anchor.top
        return handle

    def unmount(self, handle: Any) -> None:
        self.mounted.pop(handle, None)
        self.unmounted.append(handle)

    def top_of(self, handle: Any) -> float:
        return self.tops[handle]

    def position_of(self, item_id: str) -> int:
        return self.mounted[f"el-{item_id}"][1].position


class RecordingObserver(VisibilityObserver):

    def __init__(self):
        self.observed: List[str] = []
        self.unobserved: List[str] = []

    def observe(self, item_id: str, handle: Any) -> None:
        self.observed.append(item_id)

    def unobserve(self, item_id: str, handle: Any) -> None:
        self.unobserved.append(item_id)
