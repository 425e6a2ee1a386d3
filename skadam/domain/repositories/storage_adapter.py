"""
Storage adapter interface

Defines the contract for the keyed JSON persistence backends.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class StorageAdapter(ABC):
    """Keyed JSON document storage"""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Get the stored JSON value, None when absent"""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a JSON value, raising PersistenceError on failure"""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored"""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """List the stored keys"""
        pass
