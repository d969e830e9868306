from abc import ABC, abstractmethod
from typing import Dict, Optional

from resurfacer.core.review import SavedItem


class ItemStore(ABC):
    """
    Abstract key/value store of saved items, keyed by item id.

    Every operation is async. Implementations raise StorageError subclasses
    on failure; a failed put leaves the previous record in place.
    """

    backend_name: str = "abstract"

    @abstractmethod
    async def get(self, item_id: str) -> Optional[SavedItem]:
        pass

    @abstractmethod
    async def get_all(self) -> Dict[str, SavedItem]:
        pass

    @abstractmethod
    async def put(self, item: SavedItem) -> None:
        pass

    @abstractmethod
    async def delete(self, item_id: str) -> bool:
        """Remove an item. Returns False if it was not stored."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        pass

    async def contains(self, item_id: str) -> bool:
        return await self.get(item_id) is not None
