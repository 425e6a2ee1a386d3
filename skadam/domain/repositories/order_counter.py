"""
Order counter interface

The single source of truth for order numbers within a counter epoch.
"""

from abc import ABC, abstractmethod


class OrderCounter(ABC):
    """Monotonic per-deployment order number sequence"""

    @abstractmethod
    def next_number(self) -> int:
        """Atomically increment and return the new value"""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Start a new epoch; the next number issued is 1"""
        pass

    @abstractmethod
    def current(self) -> int:
        """Last issued number, 0 right after a reset"""
        pass
