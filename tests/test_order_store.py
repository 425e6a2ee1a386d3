"""
Order Store Tests
"""

from decimal import Decimal
from unittest.mock import call

import pytest

from skadam.domain.entities.notification_entity import NotificationEvent
from skadam.domain.entities.order_entity import Order, OrderStatus
from skadam.domain.events import ChangeType, OrderChangeEvent
from skadam.domain.value_objects.money import Money
from skadam.infrastructure.persistence.change_feed import OrderChangeFeed
from skadam.infrastructure.utilities.constants import StorageKeys
from skadam.infrastructure.utilities.exceptions import ValidationError


def _lines(catalog, menu, latte=1, croissant=0):
    lines = [catalog.snapshot_line(menu["latte"].id, latte)]
    if croissant:
        lines.append(catalog.snapshot_line(menu["croissant"].id, croissant))
    return lines


class TestOrderCreation:
    """Order numbering, totals and stock reservation"""

    def test_create_order_computes_total(self, sample_order):
        assert sample_order.total.format_amount() == "25.00"
        assert sample_order.status is OrderStatus.PENDING
        assert sample_order.order_number.value == 1

    def test_order_numbers_strictly_increase(self, order_store, catalog, menu):
        numbers = [
            order_store.create_order(_lines(catalog, menu), table_number=1).order_number.value
            for _ in range(5)
        ]
        assert numbers == [1, 2, 3, 4, 5]

    def test_deleting_an_order_does_not_reuse_numbers(self, order_store, catalog, menu):
        first = order_store.create_order(_lines(catalog, menu), table_number=1)
        order_store.delete_order(first.id)
        second = order_store.create_order(_lines(catalog, menu), table_number=1)
        assert second.order_number.value == 2

    def test_create_reserves_stock(self, order_store, catalog, menu):
        order_store.create_order(_lines(catalog, menu, latte=3), table_number=1)
        assert menu["latte"].inventory.quantity == 17

    def test_stock_never_negative(self, order_store, catalog, menu):
        order_store.create_order(_lines(catalog, menu, latte=50), table_number=1)
        assert menu["latte"].inventory.quantity == 0

    def test_newest_first(self, order_store, catalog, menu):
        first = order_store.create_order(_lines(catalog, menu), table_number=1)
        second = order_store.create_order(_lines(catalog, menu), table_number=2)
        assert order_store.list_orders() == [second, first]

    def test_line_snapshot_is_independent_of_catalog(self, order_store, sample_order, catalog, menu):
        catalog.delete_item(menu["latte"].id)
        assert order_store.get_order(sample_order.id).lines[0].name == "Latte"

    @pytest.mark.parametrize("table_number", [0, -1, True])
    def test_invalid_table_number(self, order_store, catalog, menu, table_number):
        with pytest.raises(ValidationError):
            order_store.create_order(_lines(catalog, menu), table_number=table_number)

    def test_empty_order_rejected_without_consuming_a_number(self, order_store, counter):
        with pytest.raises(ValidationError):
            order_store.create_order([], table_number=1)
        assert counter.current() == 0

    def test_mixed_currencies_rejected_before_any_change(
        self, order_store, catalog, menu, counter, channel
    ):
        tea = catalog.add_item("Mint Tea", "", Money(Decimal("3.00"), "EUR"), "tea")
        lines = _lines(catalog, menu, latte=2) + [catalog.snapshot_line(tea.id, 1)]

        with pytest.raises(ValidationError) as excinfo:
            order_store.create_order(lines, table_number=1)

        assert excinfo.value.field == "lines"
        assert counter.current() == 0
        assert order_store.list_orders() == []
        assert menu["latte"].inventory.quantity == 20
        channel.send.assert_not_called()

    def test_notifications_on_create(self, order_store, catalog, menu, channel):
        order_store.create_order(_lines(catalog, menu, latte=16), table_number=1)
        events = [c.args[0] for c in channel.send.call_args_list]
        assert events == [
            NotificationEvent.NEW_ORDER,
            NotificationEvent.GREETING,
            NotificationEvent.LOW_STOCK,
        ]
        low_stock_payload = channel.send.call_args_list[2].args[1]
        assert low_stock_payload["quantity"] == 4


class TestOrderStatus:
    def test_any_status_is_accepted(self, order_store, sample_order):
        order_store.update_status(sample_order.id, OrderStatus.COMPLETED)
        order = order_store.update_status(sample_order.id, OrderStatus.PENDING)
        assert order.status is OrderStatus.PENDING

    def test_paid_stamps_paid_at(self, order_store, sample_order):
        order = order_store.update_status(sample_order.id, OrderStatus.PAID)
        assert order.paid_at is not None

    def test_ready_notifies(self, order_store, sample_order, channel):
        channel.reset_mock()
        order_store.update_status(sample_order.id, OrderStatus.READY)
        assert channel.send.call_args_list == [
            call(NotificationEvent.ORDER_READY, sample_order.to_dict())
        ]

    def test_unknown_order(self, order_store):
        assert order_store.update_status("missing", OrderStatus.READY) is None

    def test_invalid_status_string(self, order_store, sample_order):
        with pytest.raises(ValidationError):
            order_store.update_status(sample_order.id, "cancelled")


class TestClearPaidOrders:
    """End-of-day clear"""

    def test_clear_keeps_unpaid_and_resets_counter(self, order_store, catalog, menu, counter):
        orders = [order_store.create_order(_lines(catalog, menu), table_number=1) for _ in range(5)]
        for order in orders[:3]:
            order_store.update_status(order.id, OrderStatus.PAID)

        removed = order_store.clear_paid_orders()

        assert removed == 3
        remaining = order_store.list_orders()
        assert {o.id for o in remaining} == {o.id for o in orders[3:]}
        assert all(o.status is not OrderStatus.PAID for o in remaining)
        assert counter.current() == 0
        assert order_store.create_order(_lines(catalog, menu), table_number=1).order_number.value == 1

    def test_persisted_after_clear(self, storage, order_store, sample_order):
        order_store.update_status(sample_order.id, OrderStatus.PAID)
        order_store.clear_paid_orders()
        assert storage.get(StorageKeys.ORDERS)["data"] == []
        assert storage.get(StorageKeys.ORDER_COUNTER)["data"] == 0


class TestSalesReport:
    def test_report_over_paid_orders(self, order_store, catalog, menu):
        first = order_store.create_order(_lines(catalog, menu, latte=2, croissant=1), table_number=1)
        second = order_store.create_order(_lines(catalog, menu, croissant=0, latte=1), table_number=2)
        order_store.create_order(_lines(catalog, menu, latte=5), table_number=3)
        order_store.update_status(first.id, OrderStatus.PAID)
        order_store.update_status(second.id, OrderStatus.PAID)

        report = order_store.sales_report()

        assert report.order_count == 2
        assert report.revenue.format_amount() == "35.00"
        assert [(i.name, i.quantity, i.revenue.format_amount()) for i in report.items] == [
            ("Latte", 3, "30.00"),
            ("Croissant", 1, "5.00"),
        ]


class TestChangeFeed:
    """Remote change events patch local state"""

    def test_insert_update_delete(self, order_store, sample_order):
        feed = OrderChangeFeed()
        order_store.attach_change_feed(feed)

        remote = Order.from_dict(sample_order.to_dict())
        remote.id = "remote-1"
        feed.publish(OrderChangeEvent(ChangeType.INSERT, remote.id, remote.to_dict()))
        assert order_store.list_orders()[0].id == "remote-1"

        remote.transition_to(OrderStatus.READY)
        feed.publish(OrderChangeEvent(ChangeType.UPDATE, remote.id, remote.to_dict()))
        assert order_store.get_order("remote-1").status is OrderStatus.READY

        feed.publish(OrderChangeEvent(ChangeType.DELETE, remote.id))
        assert order_store.get_order("remote-1") is None
        assert order_store.get_order(sample_order.id) is not None

    def test_remote_changes_are_not_persisted(self, storage, order_store, sample_order):
        before = storage.get(StorageKeys.ORDERS)
        order_store.apply_change(OrderChangeEvent(ChangeType.DELETE, sample_order.id))
        assert storage.get(StorageKeys.ORDERS) == before
