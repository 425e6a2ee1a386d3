"""Order Number value object"""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class OrderNumber:
    """Sequential order number within a counter epoch"""

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value <= 0:
            raise ValueError("Order number must be a positive integer")

    def __str__(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value
