"""
Order Store

Order creation with stock reservation, status transitions, deletion and the
end-of-day "clear paid orders" action.
"""

from collections import OrderedDict
from typing import Callable, Dict, List, Optional

from skadam.application.dtos.order_dtos import ItemSales, SalesReport
from skadam.application.stores.base_store import PersistentStore, domain_validation
from skadam.application.stores.catalog_store import CatalogStore
from skadam.domain.entities.catalog_entity import MenuItem
from skadam.domain.entities.notification_entity import NotificationEvent
from skadam.domain.entities.order_entity import Order, OrderLine, OrderStatus
from skadam.domain.events import ChangeType, OrderChangeEvent
from skadam.domain.repositories.order_counter import OrderCounter
from skadam.domain.value_objects.money import DEFAULT_CURRENCY, Money
from skadam.domain.value_objects.order_number import OrderNumber
from skadam.infrastructure.persistence.change_feed import OrderChangeFeed
from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter
from skadam.infrastructure.services.notification_service import NotificationDispatcher
from skadam.infrastructure.utilities.constants import StorageKeys
from skadam.infrastructure.utilities.exceptions import ValidationError


class OrderStore(PersistentStore):
    """Orders, newest first"""

    def __init__(
        self,
        writer: PersistenceWriter,
        counter: OrderCounter,
        catalog: CatalogStore,
        notifier: Optional[NotificationDispatcher] = None,
        currency: str = DEFAULT_CURRENCY,
    ):
        super().__init__(writer)
        self._counter = counter
        self._catalog = catalog
        self._notifier = notifier
        self._currency = currency
        self._orders: List[Order] = []

    def load(self) -> None:
        self._orders = self._load_records(StorageKeys.ORDERS, Order.from_dict) or []
        self._logger.info("📋 Orders loaded: %d", len(self._orders))

    def _save(self) -> None:
        self._persist(StorageKeys.ORDERS, self._orders)

    def _notify(self, event: NotificationEvent, payload: dict) -> None:
        if self._notifier is not None:
            self._notifier.dispatch(event, payload)

    # Queries

    def get_order(self, order_id: str) -> Optional[Order]:
        return next((order for order in self._orders if order.id == order_id), None)

    def list_orders(self, status: Optional[OrderStatus] = None) -> List[Order]:
        if status is None:
            return list(self._orders)
        return [order for order in self._orders if order.status is status]

    def paid_orders(self) -> List[Order]:
        return self.list_orders(OrderStatus.PAID)

    # Mutations

    def create_order(
        self,
        lines: List[OrderLine],
        table_number: int,
        customer_note: Optional[str] = None,
    ) -> Order:
        """
        Create a pending order and reserve stock for it.

        Inventory is decremented now, not at payment; quantities clamp at zero.
        """
        if not lines:
            raise ValidationError("An order needs at least one line", "lines")
        if isinstance(table_number, bool) or not isinstance(table_number, int) or table_number <= 0:
            raise ValidationError("Table number must be a positive integer", "table_number")
        currencies = sorted({line.price.currency for line in lines})
        if len(currencies) > 1:
            raise ValidationError(
                f"Order lines mix currencies: {', '.join(currencies)}", "lines"
            )

        number = self._counter.next_number()
        with domain_validation("order_number"):
            order = Order.create(
                lines=lines,
                order_number=OrderNumber(number),
                table_number=table_number,
                customer_note=(customer_note or "").strip() or None,
            )

        self._orders.insert(0, order)
        self._save()

        quantities: Dict[str, int] = {}
        for line in order.lines:
            quantities[line.menu_item_id] = quantities.get(line.menu_item_id, 0) + line.quantity
        low_stock = self._catalog.deduct_inventory(quantities)

        self._logger.info(
            "✅ ORDER CREATED: #%s table %s total %s",
            order.order_number,
            order.table_number,
            order.total,
        )

        payload = order.to_dict()
        self._notify(NotificationEvent.NEW_ORDER, payload)
        self._notify(NotificationEvent.GREETING, payload)
        for item in low_stock:
            self._notify(NotificationEvent.LOW_STOCK, self._low_stock_payload(item))
        return order

    @staticmethod
    def _low_stock_payload(item: MenuItem) -> dict:
        return {
            "item_id": item.id,
            "name": item.name,
            "quantity": item.inventory.quantity,
            "alert_threshold": item.inventory.alert_threshold,
            "unit": item.inventory.unit,
        }

    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        """Any status is accepted; returns None for an unknown order"""
        order = self.get_order(order_id)
        if order is None:
            return None
        with domain_validation("status"):
            new_status = OrderStatus.parse(status)
        previous = order.status
        order.transition_to(new_status)
        self._save()
        self._logger.info(
            "🔄 ORDER #%s: %s → %s", order.order_number, previous.value, order.status.value
        )
        if order.status is OrderStatus.READY and previous is not OrderStatus.READY:
            self._notify(NotificationEvent.ORDER_READY, order.to_dict())
        return order

    def delete_order(self, order_id: str) -> bool:
        remaining = [order for order in self._orders if order.id != order_id]
        if len(remaining) == len(self._orders):
            return False
        self._orders = remaining
        self._save()
        self._logger.info("🗑️ Order deleted: %s", order_id)
        return True

    def clear_paid_orders(self) -> int:
        """Drop every paid order and start a new counter epoch"""
        remaining = [order for order in self._orders if order.status is not OrderStatus.PAID]
        removed = len(self._orders) - len(remaining)
        self._orders = remaining
        self._save()
        self._counter.reset()
        self._logger.info("🧹 Cleared %d paid orders, counter reset", removed)
        return removed

    def sales_report(self) -> SalesReport:
        paid = self.paid_orders()
        currency = paid[0].currency if paid else self._currency
        items: "OrderedDict[str, ItemSales]" = OrderedDict()
        revenue = Money.zero(currency)

        for order in paid:
            revenue = revenue + order.total
            for line in order.lines:
                entry = items.get(line.menu_item_id)
                if entry is None:
                    entry = ItemSales(line.menu_item_id, line.name, 0, Money.zero(currency))
                    items[line.menu_item_id] = entry
                entry.quantity += line.quantity
                entry.revenue = entry.revenue + line.line_total

        ranked = sorted(items.values(), key=lambda sales: sales.revenue.amount, reverse=True)
        return SalesReport(order_count=len(paid), revenue=revenue, items=ranked)

    # Remote change events

    def attach_change_feed(self, feed: OrderChangeFeed) -> Callable[[], None]:
        return feed.subscribe(self.apply_change)

    def apply_change(self, event: OrderChangeEvent) -> None:
        """Patch local state from a remote row change, last write wins"""
        if event.change_type is ChangeType.DELETE:
            self._orders = [order for order in self._orders if order.id != event.order_id]
            return

        order = Order.from_dict(event.payload)
        for index, existing in enumerate(self._orders):
            if existing.id == order.id:
                self._orders[index] = order
                return
        self._orders.insert(0, order)
