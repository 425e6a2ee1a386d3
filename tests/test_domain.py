"""
Domain Layer Tests - Value Objects and Entities
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from skadam.domain.entities.base import utc_now
from skadam.domain.entities.catalog_entity import Inventory, InventorySettingsPatch, MenuItem
from skadam.domain.entities.loyalty_entity import (
    LoyaltySettings,
    LoyaltySettingsPatch,
    LoyaltyTier,
)
from skadam.domain.entities.notification_entity import NotificationEvent, NotificationSettings
from skadam.domain.entities.order_entity import Order, OrderLine, OrderStatus
from skadam.domain.entities.promotion_entity import PromoCode, QuizQuestion, QuizQuestionPatch
from skadam.domain.value_objects.money import Money
from skadam.domain.value_objects.order_number import OrderNumber
from skadam.domain.value_objects.phone_number import PhoneNumber


class TestValueObjects:
    """Test domain value objects validation and behavior"""

    def test_money_rounds_half_up(self):
        """Amounts are kept with two decimals"""
        assert Money(Decimal("2.345")).amount == Decimal("2.35")
        assert Money(10).format_amount() == "10.00"

    def test_money_parses_legacy_price_string(self):
        """The stored "8.50 TND" form becomes a decimal and currency pair"""
        price = Money.parse("8.50 TND")
        assert price.amount == Decimal("8.50")
        assert price.currency == "TND"
        assert Money.from_dict("12.75 TND") == Money(Decimal("12.75"))

    def test_money_rejects_negative(self):
        with pytest.raises(ValueError):
            Money(Decimal("-1"))
        with pytest.raises(ValueError):
            Money(Decimal("1")) - Money(Decimal("2"))

    def test_money_percentage(self):
        assert Money(Decimal("25.00")).percentage(10) == Money(Decimal("2.50"))

    def test_phone_number_strips_whitespace_only(self):
        phone = PhoneNumber("  99 000 111 ")
        assert phone.value == "99 000 111"
        assert phone.digits() == "99000111"

    def test_phone_number_invalid(self):
        """Test invalid phone numbers"""
        for value in ["", "   ", "12", "abcdefgh", "99-000-111x"]:
            with pytest.raises(ValueError):
                PhoneNumber(value)

    def test_order_number_must_be_positive(self):
        assert OrderNumber(3) > OrderNumber(2)
        for value in [0, -1, True, "1"]:
            with pytest.raises(ValueError):
                OrderNumber(value)


class TestCatalogEntities:
    """Inventory clamping and settings merge"""

    def test_inventory_quantity_never_negative(self):
        inventory = Inventory(quantity=-3)
        assert inventory.quantity == 0
        inventory.set_quantity(4)
        inventory.deduct(10)
        assert inventory.quantity == 0

    def test_inventory_low_only_when_alerts_enabled(self):
        assert Inventory(quantity=5, alert_threshold=5, alert_enabled=True).is_low()
        assert not Inventory(quantity=5, alert_threshold=5, alert_enabled=False).is_low()
        assert not Inventory(quantity=6, alert_threshold=5, alert_enabled=True).is_low()

    def test_settings_patch_defaults_when_no_inventory(self):
        """Threshold falls back to 5 and unit to "units" """
        inventory = InventorySettingsPatch(alert_enabled=True).apply_to(None)
        assert inventory.alert_threshold == 5
        assert inventory.unit == "units"
        assert inventory.quantity == 0

    def test_settings_patch_keeps_existing_values(self):
        existing = Inventory(quantity=12, alert_threshold=3, alert_enabled=False, unit="cups")
        merged = InventorySettingsPatch(alert_enabled=True).apply_to(existing)
        assert (merged.quantity, merged.alert_threshold, merged.unit) == (12, 3, "cups")
        assert merged.alert_enabled is True

    def test_menu_item_requires_name(self):
        with pytest.raises(ValueError):
            MenuItem.create("  ", "", Money(1), "coffee")


class TestOrderEntity:
    """Order totals and status handling"""

    def _order(self):
        lines = [
            OrderLine("latte", "Latte", Money(Decimal("10.00")), 2),
            OrderLine("croissant", "Croissant", Money(Decimal("5.00")), 1),
        ]
        return Order.create(lines, OrderNumber(1), table_number=3)

    def test_total_is_sum_of_lines(self):
        order = self._order()
        assert order.total.format_amount() == "25.00"
        assert order.to_dict()["total"] == "25.00"

    def test_line_quantity_must_be_positive(self):
        with pytest.raises(ValueError):
            OrderLine("latte", "Latte", Money(1), 0)

    def test_paid_transition_stamps_paid_at(self):
        order = self._order()
        order.transition_to(OrderStatus.READY)
        assert order.paid_at is None
        order.transition_to(OrderStatus.PAID)
        assert order.paid_at is not None

    def test_status_parse_rejects_unknown(self):
        assert OrderStatus.parse("ready") is OrderStatus.READY
        with pytest.raises(ValueError):
            OrderStatus.parse("cancelled")

    def test_status_sequence(self):
        assert OrderStatus.PENDING.next_status() is OrderStatus.PREPARING
        assert OrderStatus.PAID.next_status() is None

    def test_reload_keeps_snapshot(self):
        order = self._order()
        restored = Order.from_dict(order.to_dict())
        assert restored.lines == order.lines
        assert restored.order_number == order.order_number
        assert restored.total == order.total


class TestLoyaltySettings:
    """Tiering and point arithmetic"""

    def test_tier_thresholds(self):
        settings = LoyaltySettings()
        assert settings.tier_for(Decimal("0")) is LoyaltyTier.BRONZE
        assert settings.tier_for(Decimal("99.99")) is LoyaltyTier.BRONZE
        assert settings.tier_for(Decimal("100")) is LoyaltyTier.SILVER
        assert settings.tier_for(Decimal("500")) is LoyaltyTier.GOLD
        assert settings.tier_for(Decimal("1000")) is LoyaltyTier.PLATINUM

    def test_tier_is_non_decreasing_with_spend(self):
        settings = LoyaltySettings()
        order = list(LoyaltyTier)
        previous = 0
        for spent in range(0, 1500, 25):
            rank = order.index(settings.tier_for(Decimal(spent)))
            assert rank >= previous
            previous = rank

    def test_points_are_floored_twice(self):
        settings = LoyaltySettings(points_per_currency_unit=Decimal("1.5"))
        # floor(9.99 × 1.5) = 14, floor(14 × 1.2) = 16
        assert settings.points_for(Decimal("9.99"), LoyaltyTier.SILVER) == 16
        assert LoyaltySettings().points_for(Decimal("25"), LoyaltyTier.SILVER) == 30

    def test_patch_merges_tier_tables(self):
        settings = LoyaltySettings()
        LoyaltySettingsPatch(tier_multipliers={LoyaltyTier.GOLD: Decimal("3")}).apply_to(settings)
        assert settings.multiplier_for(LoyaltyTier.GOLD) == Decimal("3")
        assert settings.multiplier_for(LoyaltyTier.SILVER) == Decimal("1.2")

    def test_patch_rejects_zero_redemption_points(self):
        with pytest.raises(ValueError):
            LoyaltySettingsPatch(points_for_redemption=0).apply_to(LoyaltySettings())

    def test_settings_reload(self):
        settings = LoyaltySettings(welcome_bonus=75, enabled=False)
        restored = LoyaltySettings.from_dict(settings.to_dict())
        assert restored == settings


class TestPromotionEntities:
    """Promo code redeemability and quiz questions"""

    def test_code_matching_ignores_case(self):
        promo = PromoCode.create("SAVE10", 10)
        assert promo.matches("save10")
        assert promo.matches(" Save10 ")

    def test_redeemable_rules(self):
        now = utc_now()
        assert PromoCode.create("A", 10).is_redeemable(now)
        assert not PromoCode.create("B", 10, expires_at=now - timedelta(seconds=1)).is_redeemable(now)
        exhausted = PromoCode.create("C", 10, max_usage=1)
        exhausted.usage_count = 1
        assert not exhausted.is_redeemable(now)
        inactive = PromoCode.create("D", 10)
        inactive.is_active = False
        assert not inactive.is_redeemable(now)

    def test_discount_range(self):
        for value in [0, 101, -5]:
            with pytest.raises(ValueError):
                PromoCode.create("X", value)

    def test_question_answer_index_checked(self):
        with pytest.raises(ValueError):
            QuizQuestion.create("Q?", ["a", "b"], 2)
        question = QuizQuestion.create("Q?", ["a", "b"], 1)
        with pytest.raises(ValueError):
            QuizQuestionPatch(options=["only"]).apply_to(question)
        assert question.options == ["a", "b"]


class TestNotificationSettings:
    def test_event_gating(self):
        settings = NotificationSettings(order_notifications=False)
        assert not settings.allows(NotificationEvent.NEW_ORDER)
        assert settings.allows(NotificationEvent.LOW_STOCK)
        settings.customer_notifications = False
        assert not settings.allows(NotificationEvent.ORDER_READY)
        assert not settings.allows(NotificationEvent.GREETING)
