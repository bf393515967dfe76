from __future__ import annotations

import threading

from menu_api.core.errors import MenuItemNotFoundError
from menu_api.menu.models import MenuItem, MenuItemPayload


class MenuStore:
    """
    In-memory menu items plus the id counter.

    Ids start at 1 and are never reused, even after a delete. A single lock
    covers every operation because FastAPI may call handlers from worker
    threads. Items handed out are copies of the stored records.
    """

    def __init__(self) -> None:
        self._items: list[MenuItem] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def list(self) -> list[MenuItem]:
        with self._lock:
            return [item.model_copy(deep=True) for item in self._items]

    def get(self, item_id: int) -> MenuItem:
        with self._lock:
            return self._items[self._index_of(item_id)].model_copy(deep=True)

    def create(self, fields: MenuItemPayload) -> MenuItem:
        with self._lock:
            item = MenuItem.from_payload(self._next_id, fields)
            self._next_id += 1
            self._items.append(item)
            return item.model_copy(deep=True)

    def update(self, item_id: int, fields: MenuItemPayload) -> MenuItem:
        with self._lock:
            index = self._index_of(item_id)
            item = MenuItem.from_payload(item_id, fields)
            self._items[index] = item
            return item.model_copy(deep=True)

    def delete(self, item_id: int) -> MenuItem:
        with self._lock:
            return self._items.pop(self._index_of(item_id)).model_copy(deep=True)

    def _index_of(self, item_id: int) -> int:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        raise MenuItemNotFoundError(item_id)
