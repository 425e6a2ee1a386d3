"""
In-process publish/subscribe hub for remote order table changes
"""

import logging
import threading
from typing import Callable, List

from skadam.domain.events import OrderChangeEvent

logger = logging.getLogger(__name__)

OrderChangeHandler = Callable[[OrderChangeEvent], None]


class OrderChangeFeed:
    """Delivers events to subscribers in arrival order"""

    def __init__(self):
        self._subscribers: List[OrderChangeHandler] = []
        self._lock = threading.Lock()

    def subscribe(self, handler: OrderChangeHandler) -> Callable[[], None]:
        """Register a handler; returns a callable that unsubscribes it"""
        with self._lock:
            self._subscribers.append(handler)

        def unsubscribe() -> None:
            with self._lock:
                if handler in self._subscribers:
                    self._subscribers.remove(handler)

        return unsubscribe

    def publish(self, event: OrderChangeEvent) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for handler in subscribers:
            try:
                handler(event)
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.error(
                    "💥 Order change handler failed for %s %s: %s",
                    event.change_type.value,
                    event.order_id,
                    e,
                )
