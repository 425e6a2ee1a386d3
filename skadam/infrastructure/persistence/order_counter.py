"""
Order counter backed by the keyed storage
"""

import logging
import threading

from skadam.domain.repositories.order_counter import OrderCounter
from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter
from skadam.infrastructure.utilities.constants import StorageKeys

logger = logging.getLogger(__name__)


class StorageOrderCounter(OrderCounter):
    """In-memory authoritative counter, mirrored under `order_counter`"""

    def __init__(self, writer: PersistenceWriter):
        self._writer = writer
        self._value = 0
        self._lock = threading.Lock()

    def load(self) -> None:
        stored = self._writer.load(StorageKeys.ORDER_COUNTER)
        with self._lock:
            try:
                self._value = max(0, int(stored or 0))
            except (TypeError, ValueError):
                logger.warning("⚠️ Ignoring unreadable order counter value: %r", stored)
                self._value = 0

    def next_number(self) -> int:
        with self._lock:
            self._value += 1
            value = self._value
            self._writer.persist(StorageKeys.ORDER_COUNTER, value)
        return value

    def reset(self) -> None:
        with self._lock:
            self._value = 0
            self._writer.persist(StorageKeys.ORDER_COUNTER, 0)
        logger.info("🔄 Order counter reset")

    def current(self) -> int:
        with self._lock:
            return self._value
