"""
Order Settlement Use Case

Runs when staff mark an order paid: resolve the loyalty customer, apply an
optional promo code, award points and record the payment.
"""

import logging
from typing import Optional

from skadam.application.dtos.settlement_dtos import SettlementRequest, SettlementResult
from skadam.application.stores.loyalty_store import LoyaltyStore
from skadam.application.stores.order_store import OrderStore
from skadam.application.stores.promotion_store import PromotionStore
from skadam.domain.entities.loyalty_entity import LoyaltyCustomer
from skadam.domain.entities.order_entity import Order, OrderStatus
from skadam.domain.value_objects.money import Money
from skadam.domain.value_objects.phone_number import PhoneNumber
from skadam.infrastructure.logging.logging_config import get_structured_logger
from skadam.infrastructure.utilities.exceptions import OrderNotFoundError, ValidationError

LOYALTY_FAILED_MESSAGE = "Order marked as paid. Loyalty points could not be processed."


class OrderSettlementUseCase:
    """
    Settlement workflow.

    There is no rollback: a failure while handling loyalty or the promo code is
    logged and reported, and the order is marked paid regardless.
    """

    def __init__(
        self,
        order_store: OrderStore,
        loyalty_store: LoyaltyStore,
        promotion_store: PromotionStore,
    ):
        self._order_store = order_store
        self._loyalty_store = loyalty_store
        self._promotion_store = promotion_store
        self._logger = logging.getLogger(self.__class__.__name__)
        self._audit = get_structured_logger("skadam.settlement")

    def settle(self, request: SettlementRequest) -> SettlementResult:
        order = self._order_store.get_order(request.order_id)
        if order is None:
            raise OrderNotFoundError(request.order_id)

        phone = self._parse_phone(request.phone_number)
        original_total = order.total
        result = SettlementResult(
            order_id=order.id,
            order_number=order.order_number.value,
            original_total=original_total,
            discount=Money.zero(original_total.currency),
            final_total=original_total,
        )

        self._logger.info("💳 ===== SETTLEMENT STARTED: order #%s =====", order.order_number)

        if not self._loyalty_store.settings.enabled:
            self._logger.info("🎁 Loyalty program disabled, marking paid only")
            result.message = "Order marked as paid."
        else:
            try:
                customer = self._resolve_customer(phone) if phone is not None else None
                self._apply_promo(order, request.promo_code, result)
                if customer is not None:
                    self._award_points(order, customer, result)
                result.message = self._summary(result)
            except Exception as e:  # pylint: disable=broad-exception-caught
                self._logger.error(
                    "💥 Loyalty processing failed for order #%s: %s",
                    order.order_number,
                    e,
                    exc_info=True,
                )
                result.message = LOYALTY_FAILED_MESSAGE

        self._order_store.update_status(order.id, OrderStatus.PAID)

        self._audit.info(
            "order_settled",
            order_id=order.id,
            order_number=result.order_number,
            original_total=result.original_total.format_amount(),
            discount=result.discount.format_amount(),
            final_total=result.final_total.format_amount(),
            promo_code=result.promo_code,
            points_earned=result.points_earned,
            loyalty_applied=result.loyalty_applied,
        )
        self._logger.info("✅ ===== SETTLEMENT COMPLETED: order #%s =====", order.order_number)
        return result

    @staticmethod
    def _parse_phone(phone_number: Optional[str]) -> Optional[PhoneNumber]:
        """None means no phone was captured; anything else must be a valid number"""
        if phone_number is None:
            return None
        try:
            return PhoneNumber(phone_number)
        except ValueError as e:
            raise ValidationError(str(e), "phone_number") from e

    def _apply_promo(self, order: Order, code: Optional[str], result: SettlementResult) -> None:
        """Re-check the code at settlement time; an invalid code is silently not applied"""
        if not code or not code.strip():
            return
        promo = self._promotion_store.validate(code)
        if promo is None:
            self._logger.info("🏷️ Promo code %s no longer valid, no discount", code)
            return
        discount = promo.discount_for(order.total)
        if not self._promotion_store.consume(code):
            return
        result.promo_code = promo.code
        result.discount = discount
        result.final_total = order.total - discount

    def _award_points(
        self, order: Order, customer: LoyaltyCustomer, result: SettlementResult
    ) -> None:
        """Points are earned on the pre-discount total"""
        earned = self._loyalty_store.add_points(
            customer.id, order.order_number.value, result.original_total
        )
        result.customer_name = customer.name
        result.points_earned = earned
        result.total_points = customer.points
        result.loyalty_applied = True

    def _resolve_customer(self, phone: PhoneNumber) -> LoyaltyCustomer:
        customer = self._loyalty_store.find_by_phone(phone.value)
        if customer is None:
            customer = self._loyalty_store.add_customer(f"Customer {phone.value}", phone.value)
            self._logger.info("👤 New loyalty customer created at settlement: %s", customer.id)
        return customer

    @staticmethod
    def _summary(result: SettlementResult) -> str:
        message = "Order marked as paid."
        if result.loyalty_applied:
            message += (
                f" {result.customer_name} earned {result.points_earned} points!"
                f" Total points: {result.total_points}."
            )
        if result.promo_code:
            message += (
                f" Promo {result.promo_code}: {result.discount.format_display()} discount,"
                f" final amount {result.final_total.format_display()}."
            )
        return message
