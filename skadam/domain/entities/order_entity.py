# pylint: disable=too-many-instance-attributes
"""
Order entity - table orders and their lifecycle
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from skadam.domain.entities.base import dump_datetime, load_datetime, new_id, utc_now
from skadam.domain.value_objects.money import DEFAULT_CURRENCY, Money
from skadam.domain.value_objects.order_number import OrderNumber


class OrderStatus(str, Enum):
    """Order lifecycle: pending → preparing → ready → completed → paid"""

    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    PAID = "paid"

    @classmethod
    def parse(cls, value: "str | OrderStatus") -> "OrderStatus":
        try:
            return cls(value)
        except ValueError as e:
            allowed = ", ".join(status.value for status in cls)
            raise ValueError(f"Invalid order status '{value}'. Allowed: {allowed}") from e

    def next_status(self) -> Optional["OrderStatus"]:
        """The following lifecycle step, None once paid"""
        members = list(OrderStatus)
        index = members.index(self)
        return members[index + 1] if index + 1 < len(members) else None


@dataclass(frozen=True)
class OrderLine:
    """Value snapshot of a menu item at order time"""

    menu_item_id: str
    name: str
    price: Money
    quantity: int
    image: str = ""

    def __post_init__(self):
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity <= 0:
            raise ValueError("Order line quantity must be a positive integer")
        if not self.menu_item_id:
            raise ValueError("Order line must reference a menu item")

    @property
    def line_total(self) -> Money:
        return self.price.multiply(self.quantity)

    def to_dict(self) -> dict:
        return {
            "menu_item_id": self.menu_item_id,
            "name": self.name,
            "price": self.price.to_dict(),
            "quantity": self.quantity,
            "image": self.image,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OrderLine":
        return cls(
            menu_item_id=data["menu_item_id"],
            name=data.get("name", ""),
            price=Money.from_dict(data["price"]),
            quantity=int(data["quantity"]),
            image=data.get("image", ""),
        )


@dataclass
class Order:
    """Order domain entity"""

    id: str
    lines: List[OrderLine]
    order_number: OrderNumber
    table_number: int
    status: OrderStatus = OrderStatus.PENDING
    customer_note: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    paid_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        lines: List[OrderLine],
        order_number: OrderNumber,
        table_number: int,
        customer_note: Optional[str] = None,
    ) -> "Order":
        return cls(
            id=new_id(),
            lines=list(lines),
            order_number=order_number,
            table_number=table_number,
            customer_note=customer_note,
        )

    @property
    def currency(self) -> str:
        return self.lines[0].price.currency if self.lines else DEFAULT_CURRENCY

    @property
    def total(self) -> Money:
        """Sum of price × quantity over all lines"""
        return Money.total((line.line_total for line in self.lines), self.currency)

    def transition_to(self, status: OrderStatus, now: Optional[datetime] = None) -> None:
        """Any status is accepted; becoming paid stamps paid_at"""
        self.status = status
        if status is OrderStatus.PAID:
            self.paid_at = now or utc_now()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "lines": [line.to_dict() for line in self.lines],
            "total": self.total.format_amount(),
            "currency": self.currency,
            "status": self.status.value,
            "customer_note": self.customer_note,
            "created_at": dump_datetime(self.created_at),
            "order_number": self.order_number.value,
            "paid_at": dump_datetime(self.paid_at),
            "table_number": self.table_number,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Order":
        return cls(
            id=data["id"],
            lines=[OrderLine.from_dict(line) for line in data.get("lines", [])],
            order_number=OrderNumber(int(data["order_number"])),
            table_number=int(data["table_number"]),
            status=OrderStatus.parse(data.get("status", OrderStatus.PENDING.value)),
            customer_note=data.get("customer_note"),
            created_at=load_datetime(data.get("created_at")) or utc_now(),
            paid_at=load_datetime(data.get("paid_at")),
        )
