from typing import Dict, Optional

from resurfacer.core.review import SavedItem

from .base import ItemStore


class InMemoryItemStore(ItemStore):
    """Process-local store. Used by tests and as a scratch backend."""

    backend_name = "memory"

    def __init__(self, items: Optional[Dict[str, SavedItem]] = None):
        self._items: Dict[str, SavedItem] = dict(items or {})

    async def get(self, item_id: str) -> Optional[SavedItem]:
        return self._items.get(item_id)

    async def get_all(self) -> Dict[str, SavedItem]:
        return dict(self._items)

    async def put(self, item: SavedItem) -> None:
        self._items[item.id] = item

    async def delete(self, item_id: str) -> bool:
        return self._items.pop(item_id, None) is not None

    async def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
