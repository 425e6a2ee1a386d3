"""
Loyalty Store

Customer records keyed by phone number, tiering, point accrual and
redemption, and the append-only points ledger.
"""

from decimal import Decimal
from typing import List, Optional, Union

from skadam.application.stores.base_store import PersistentStore, domain_validation
from skadam.domain.entities.base import utc_now
from skadam.domain.entities.loyalty_entity import (
    WELCOME_ORDER_ID,
    CustomerPatch,
    LoyaltyCustomer,
    LoyaltySettings,
    LoyaltySettingsPatch,
    LoyaltyTier,
    LoyaltyTransaction,
    TransactionType,
)
from skadam.domain.value_objects.money import DEFAULT_CURRENCY, Money
from skadam.domain.value_objects.phone_number import PhoneNumber
from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter
from skadam.infrastructure.utilities.constants import StorageKeys
from skadam.infrastructure.utilities.exceptions import DuplicateKeyError, ValidationError


def _as_decimal(amount: Union[Money, Decimal, int, str]) -> Decimal:
    if isinstance(amount, Money):
        return amount.amount
    return Decimal(str(amount))


class LoyaltyStore(PersistentStore):
    """Customers, ledger and program settings"""

    def __init__(self, writer: PersistenceWriter, currency: str = DEFAULT_CURRENCY):
        super().__init__(writer)
        self._currency = currency
        self._customers: List[LoyaltyCustomer] = []
        self._transactions: List[LoyaltyTransaction] = []
        self._settings = LoyaltySettings()

    def load(self) -> None:
        self._customers = (
            self._load_records(StorageKeys.LOYALTY_CUSTOMERS, LoyaltyCustomer.from_dict) or []
        )
        self._transactions = (
            self._load_records(StorageKeys.LOYALTY_TRANSACTIONS, LoyaltyTransaction.from_dict)
            or []
        )
        stored_settings = self._writer.load(StorageKeys.LOYALTY_SETTINGS)
        if isinstance(stored_settings, dict):
            try:
                self._settings = LoyaltySettings.from_dict(stored_settings)
            except (TypeError, ValueError, ArithmeticError) as e:
                self._logger.warning("⚠️ Unreadable loyalty settings, using defaults: %s", e)
        self._logger.info(
            "🎁 Loyalty loaded: %d customers, %d transactions",
            len(self._customers),
            len(self._transactions),
        )

    def _save_customers(self) -> None:
        self._persist(StorageKeys.LOYALTY_CUSTOMERS, self._customers)

    def _save_transactions(self) -> None:
        self._persist(StorageKeys.LOYALTY_TRANSACTIONS, self._transactions)

    def _record(self, transaction: LoyaltyTransaction) -> None:
        self._transactions.append(transaction)
        self._save_transactions()

    # Settings and tiers

    @property
    def settings(self) -> LoyaltySettings:
        return self._settings

    def update_settings(self, patch: LoyaltySettingsPatch) -> LoyaltySettings:
        with domain_validation():
            patch.apply_to(self._settings)
        self._writer.persist(StorageKeys.LOYALTY_SETTINGS, self._settings.to_dict())
        return self._settings

    def get_tier(self, total_spent: Union[Money, Decimal, int]) -> LoyaltyTier:
        return self._settings.tier_for(_as_decimal(total_spent))

    def get_points_multiplier(self, tier: LoyaltyTier) -> Decimal:
        return self._settings.multiplier_for(tier)

    # Customers

    def get_customer(self, customer_id: str) -> Optional[LoyaltyCustomer]:
        return next((c for c in self._customers if c.id == customer_id), None)

    def list_customers(self) -> List[LoyaltyCustomer]:
        return list(self._customers)

    def find_by_phone(self, phone_number: str) -> Optional[LoyaltyCustomer]:
        """First active customer whose phone matches exactly"""
        wanted = (phone_number or "").strip()
        if not wanted:
            return None
        return next(
            (c for c in self._customers if c.is_active and c.phone_number.value == wanted),
            None,
        )

    def add_customer(self, name: str, phone_number: str) -> LoyaltyCustomer:
        """Enrol a customer with the welcome bonus, recorded in the ledger"""
        if not name or not name.strip():
            raise ValidationError("Customer name is required", "name")
        with domain_validation("phone_number"):
            phone = PhoneNumber(phone_number)
        if self.find_by_phone(phone.value) is not None:
            raise DuplicateKeyError("phone_number", phone.value)

        bonus = self._settings.welcome_bonus
        customer = LoyaltyCustomer.create(name.strip(), phone, points=bonus, currency=self._currency)
        self._customers.append(customer)
        self._save_customers()

        self._record(
            LoyaltyTransaction.record(
                customer_id=customer.id,
                order_id=WELCOME_ORDER_ID,
                type_=TransactionType.EARN,
                points=bonus,
                amount=Money.zero(self._currency),
                description="Welcome bonus",
            )
        )
        self._logger.info("👤 Loyalty customer enrolled: %s (%s)", customer.name, customer.id)
        return customer

    def update_customer(self, customer_id: str, patch: CustomerPatch) -> Optional[LoyaltyCustomer]:
        """Merge the patch; the tier follows total spent unless the customer is being deactivated"""
        customer = self.get_customer(customer_id)
        if customer is None:
            return None
        if patch.phone_number is not None:
            existing = self.find_by_phone(patch.phone_number.value)
            if existing is not None and existing.id != customer_id:
                raise DuplicateKeyError("phone_number", patch.phone_number.value)
        patch.apply_to(customer)
        if patch.is_active is not False:
            customer.tier = self.get_tier(customer.total_spent)
        self._save_customers()
        return customer

    def delete_customer(self, customer_id: str) -> bool:
        """Hard delete, cascading to the customer's ledger entries"""
        remaining = [c for c in self._customers if c.id != customer_id]
        if len(remaining) == len(self._customers):
            return False
        self._customers = remaining
        self._transactions = [t for t in self._transactions if t.customer_id != customer_id]
        self._save_customers()
        self._save_transactions()
        self._logger.info("🗑️ Loyalty customer deleted with ledger: %s", customer_id)
        return True

    # Points

    def add_points(
        self, customer_id: str, order_id: Union[str, int], amount: Union[Money, Decimal, int]
    ) -> int:
        """
        Award points for a purchase and return how many were earned.

        The multiplier comes from the tier held before this purchase; the tier
        is then recomputed from the new cumulative spend.
        """
        customer = self.get_customer(customer_id)
        if customer is None:
            self._logger.warning("⚠️ add_points: customer %s not found", customer_id)
            return 0

        spent = _as_decimal(amount)
        if spent < 0:
            raise ValidationError("Purchase amount cannot be negative", "amount")
        earned = self._settings.points_for(spent, customer.tier)
        purchase = Money(spent, customer.total_spent.currency)

        customer.points += earned
        customer.total_spent = customer.total_spent + purchase
        customer.visit_count += 1
        customer.last_visit = utc_now()
        customer.tier = self.get_tier(customer.total_spent)
        self._save_customers()

        self._record(
            LoyaltyTransaction.record(
                customer_id=customer.id,
                order_id=str(order_id),
                type_=TransactionType.EARN,
                points=earned,
                amount=purchase,
                description=f"Earned from order #{order_id}",
            )
        )
        self._logger.info(
            "⭐ %s earned %d points (balance %d, tier %s)",
            customer.id,
            earned,
            customer.points,
            customer.tier.value,
        )
        return earned

    def redeem_points(self, customer_id: str, order_id: Union[str, int], points: int) -> bool:
        """Fails closed: no mutation when the customer is missing or the balance is short"""
        customer = self.get_customer(customer_id)
        if customer is None or points <= 0 or points > customer.points:
            return False

        value = Money(self._settings.redemption_amount(points), customer.total_spent.currency)
        customer.points -= points
        customer.last_visit = utc_now()
        self._save_customers()

        self._record(
            LoyaltyTransaction.record(
                customer_id=customer.id,
                order_id=str(order_id),
                type_=TransactionType.REDEEM,
                points=-points,
                amount=value,
                description=f"Redeemed {points} points for {value.format_display()} discount",
            )
        )
        return True

    def transactions_for(self, customer_id: str) -> List[LoyaltyTransaction]:
        """Ledger entries of one customer, newest first"""
        entries = [t for t in self._transactions if t.customer_id == customer_id]
        return list(reversed(entries))
