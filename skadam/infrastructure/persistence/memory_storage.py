"""
In-memory storage adapter, used by tests and the `memory` backend
"""

import copy
import threading
from typing import Any, Dict, List, Optional

from skadam.domain.repositories.storage_adapter import StorageAdapter


class InMemoryStorage(StorageAdapter):
    """Dictionary-backed storage; values are deep-copied on the way in and out"""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            value = self._data.get(key)
            return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._data)
