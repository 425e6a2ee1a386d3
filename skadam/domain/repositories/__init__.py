"""
Repository interfaces
"""

from skadam.domain.repositories.order_counter import OrderCounter
from skadam.domain.repositories.storage_adapter import StorageAdapter

__all__ = ["OrderCounter", "StorageAdapter"]
