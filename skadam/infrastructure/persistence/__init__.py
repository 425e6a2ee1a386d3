"""
Persistence adapters, the background writer and the order counter
"""

from skadam.infrastructure.persistence.change_feed import OrderChangeFeed
from skadam.infrastructure.persistence.json_file_storage import JsonFileStorage
from skadam.infrastructure.persistence.memory_storage import InMemoryStorage
from skadam.infrastructure.persistence.order_counter import StorageOrderCounter
from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter

__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "OrderChangeFeed",
    "PersistenceWriter",
    "StorageOrderCounter",
]
