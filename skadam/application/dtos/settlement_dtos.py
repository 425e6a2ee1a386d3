"""
Settlement DTOs

Request and result of marking an order paid.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from skadam.domain.value_objects.money import Money


@dataclass
class SettlementRequest:
    """Order to settle plus the optional phone number and promo code captured at the till"""

    order_id: str
    phone_number: Optional[str] = None
    promo_code: Optional[str] = None


@dataclass
class SettlementResult:
    """What the staff member sees after settlement"""

    order_id: str
    order_number: int
    original_total: Money
    discount: Money
    final_total: Money
    customer_name: Optional[str] = None
    points_earned: int = 0
    total_points: Optional[int] = None
    promo_code: Optional[str] = None
    loyalty_applied: bool = False
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "order_id": self.order_id,
            "order_number": self.order_number,
            "original_total": self.original_total.format_amount(),
            "discount": self.discount.format_amount(),
            "final_total": self.final_total.format_amount(),
            "currency": self.final_total.currency,
            "customer_name": self.customer_name,
            "points_earned": self.points_earned,
            "total_points": self.total_points,
            "promo_code": self.promo_code,
            "loyalty_applied": self.loyalty_applied,
            "message": self.message,
        }
