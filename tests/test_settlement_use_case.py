"""
Order Settlement Use Case Tests
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from skadam.application.dtos.settlement_dtos import SettlementRequest
from skadam.application.use_cases.order_settlement_use_case import LOYALTY_FAILED_MESSAGE
from skadam.domain.entities.loyalty_entity import CustomerPatch, LoyaltySettingsPatch, LoyaltyTier
from skadam.domain.entities.order_entity import OrderStatus
from skadam.domain.value_objects.money import Money
from skadam.infrastructure.utilities.exceptions import OrderNotFoundError, ValidationError

PHONE = "+216 98 765 432"


@pytest.fixture
def silver_customer(loyalty_store):
    customer = loyalty_store.add_customer("Yasmine", PHONE)
    loyalty_store.update_customer(customer.id, CustomerPatch(total_spent=Money(Decimal("150.00"))))
    assert customer.tier is LoyaltyTier.SILVER
    return customer


class TestSettlement:
    """Marking orders paid with loyalty and promo handling"""

    def test_silver_customer_earns_with_multiplier(self, settlement, order_store, sample_order, silver_customer):
        result = settlement.settle(SettlementRequest(sample_order.id, phone_number=PHONE))

        assert result.loyalty_applied is True
        assert result.points_earned == 30
        assert result.total_points == 80
        assert result.customer_name == "Yasmine"
        assert result.message == "Order marked as paid. Yasmine earned 30 points! Total points: 80."
        assert order_store.get_order(sample_order.id).status is OrderStatus.PAID

    def test_unknown_phone_creates_customer(self, settlement, loyalty_store, sample_order):
        result = settlement.settle(SettlementRequest(sample_order.id, phone_number=PHONE))

        customer = loyalty_store.find_by_phone(PHONE)
        assert customer.name == f"Customer {PHONE}"
        assert result.points_earned == 25
        assert customer.points == 75

    def test_promo_discount_applied_and_consumed(self, settlement, promotion_store, sample_order, silver_customer):
        promotion_store.create_promo_code("SAVE10", 10, max_usage=1)

        result = settlement.settle(
            SettlementRequest(sample_order.id, phone_number=PHONE, promo_code="save10")
        )

        assert result.promo_code == "SAVE10"
        assert result.discount == Money(Decimal("2.50"))
        assert result.final_total == Money(Decimal("22.50"))
        assert result.points_earned == 30
        assert promotion_store.validate("SAVE10") is None

    def test_spent_promo_is_ignored(self, settlement, promotion_store, sample_order):
        promo = promotion_store.create_promo_code("ONCE", 10, max_usage=1)
        promotion_store.consume("ONCE")

        result = settlement.settle(SettlementRequest(sample_order.id, promo_code="ONCE"))

        assert result.promo_code is None
        assert result.final_total == Money(Decimal("25.00"))
        assert promo.usage_count == 1

    def test_no_phone_still_applies_promo(self, settlement, promotion_store, loyalty_store, sample_order):
        promotion_store.create_promo_code("TEN", 10)
        result = settlement.settle(SettlementRequest(sample_order.id, promo_code="TEN"))
        assert result.loyalty_applied is False
        assert result.final_total == Money(Decimal("22.50"))
        assert loyalty_store.list_customers() == []

    @pytest.mark.parametrize("phone", ["", "   ", "call me"])
    def test_bad_phone_rejected_before_any_change(self, settlement, order_store, sample_order, phone):
        with pytest.raises(ValidationError):
            settlement.settle(SettlementRequest(sample_order.id, phone_number=phone))
        assert order_store.get_order(sample_order.id).status is OrderStatus.PENDING

    def test_missing_order(self, settlement):
        with pytest.raises(OrderNotFoundError):
            settlement.settle(SettlementRequest("missing", phone_number=PHONE))

    def test_loyalty_disabled_only_marks_paid(self, settlement, loyalty_store, promotion_store, order_store, sample_order):
        loyalty_store.update_settings(LoyaltySettingsPatch(enabled=False))
        promo = promotion_store.create_promo_code("TEN", 10)

        result = settlement.settle(SettlementRequest(sample_order.id, phone_number=PHONE, promo_code="TEN"))

        assert result.message == "Order marked as paid."
        assert result.loyalty_applied is False
        assert promo.usage_count == 0
        assert loyalty_store.list_customers() == []
        assert order_store.get_order(sample_order.id).status is OrderStatus.PAID

    def test_loyalty_failure_still_marks_paid(self, settlement, loyalty_store, order_store, sample_order, silver_customer):
        with patch.object(loyalty_store, "add_points", side_effect=RuntimeError("ledger down")):
            result = settlement.settle(SettlementRequest(sample_order.id, phone_number=PHONE))

        assert result.message == LOYALTY_FAILED_MESSAGE
        assert order_store.get_order(sample_order.id).status is OrderStatus.PAID

    def test_customer_failure_leaves_promo_unused(self, settlement, loyalty_store, promotion_store, order_store, sample_order):
        promo = promotion_store.create_promo_code("SAVE10", 10, max_usage=1)
        with patch.object(loyalty_store, "add_customer", side_effect=RuntimeError("ledger down")):
            result = settlement.settle(
                SettlementRequest(sample_order.id, phone_number=PHONE, promo_code="SAVE10")
            )

        assert result.message == LOYALTY_FAILED_MESSAGE
        assert result.promo_code is None
        assert promo.usage_count == 0
        assert order_store.get_order(sample_order.id).status is OrderStatus.PAID

    def test_result_serialization(self, settlement, sample_order):
        data = settlement.settle(SettlementRequest(sample_order.id)).to_dict()
        assert data["original_total"] == "25.00"
        assert data["final_total"] == "25.00"
        assert data["currency"] == "TND"
        assert data["order_number"] == 1
