"""
Order DTOs

Data Transfer Objects for the paid-orders report.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from skadam.domain.value_objects.money import Money


@dataclass
class ItemSales:
    """Sales of one menu item across paid orders"""

    menu_item_id: str
    name: str
    quantity: int
    revenue: Money

    def to_dict(self) -> Dict[str, Any]:
        return {
            "menu_item_id": self.menu_item_id,
            "name": self.name,
            "quantity": self.quantity,
            "revenue": self.revenue.format_amount(),
        }


@dataclass
class SalesReport:
    """Receipt-style summary of the paid orders, items sorted by revenue"""

    order_count: int
    revenue: Money
    items: List[ItemSales] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "order_count": self.order_count,
            "revenue": self.revenue.format_amount(),
            "currency": self.revenue.currency,
            "items": [item.to_dict() for item in self.items],
        }
