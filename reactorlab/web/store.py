from __future__ import annotations

from collections import OrderedDict
from threading import Lock
from typing import Any, Optional
import uuid


class DatasheetStore:
    """Posted datasheets keyed by an opaque token, oldest evicted first."""

    def __init__(self, max_entries: int = 256) -> None:
        self.max_entries = max_entries
        self._items: "OrderedDict[str, Any]" = OrderedDict()
        self._lock = Lock()

    def put(self, data: Any, token: Optional[str] = None) -> str:
        token = token or uuid.uuid4().hex
        with self._lock:
            self._items[token] = data
            self._items.move_to_end(token)
            while len(self._items) > self.max_entries:
                self._items.popitem(last=False)
        return token

    def get(self, token: Optional[str]) -> Optional[Any]:
        if not token:
            return None
        with self._lock:
            return self._items.get(token)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
