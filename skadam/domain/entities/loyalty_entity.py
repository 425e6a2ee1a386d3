# pylint: disable=too-many-instance-attributes
"""
Loyalty program entities

Customers, the append-only points ledger, and the singleton program settings.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_FLOOR, Decimal
from enum import Enum
from typing import Dict, Optional

from skadam.domain.entities.base import dump_datetime, load_datetime, new_id, utc_now
from skadam.domain.value_objects.money import DEFAULT_CURRENCY, Money
from skadam.domain.value_objects.phone_number import PhoneNumber

WELCOME_ORDER_ID = "welcome"


class LoyaltyTier(str, Enum):
    """Loyalty rank derived from cumulative spend"""

    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


class TransactionType(str, Enum):
    EARN = "earn"
    REDEEM = "redeem"


def _decimal_map(values: Dict, default: Dict[LoyaltyTier, Decimal]) -> Dict[LoyaltyTier, Decimal]:
    result = dict(default)
    for tier, value in (values or {}).items():
        result[LoyaltyTier(tier)] = Decimal(str(value))
    return result


def _default_multipliers() -> Dict[LoyaltyTier, Decimal]:
    return {
        LoyaltyTier.BRONZE: Decimal("1"),
        LoyaltyTier.SILVER: Decimal("1.2"),
        LoyaltyTier.GOLD: Decimal("1.5"),
        LoyaltyTier.PLATINUM: Decimal("2"),
    }


def _default_thresholds() -> Dict[LoyaltyTier, Decimal]:
    return {
        LoyaltyTier.BRONZE: Decimal("0"),
        LoyaltyTier.SILVER: Decimal("100"),
        LoyaltyTier.GOLD: Decimal("500"),
        LoyaltyTier.PLATINUM: Decimal("1000"),
    }


@dataclass
class LoyaltySettings:
    """Singleton loyalty program configuration"""

    points_per_currency_unit: Decimal = Decimal("1")
    points_for_redemption: int = 100
    redemption_value: Decimal = Decimal("5")
    welcome_bonus: int = 50
    birthday_bonus: int = 100
    tier_multipliers: Dict[LoyaltyTier, Decimal] = field(default_factory=_default_multipliers)
    tier_thresholds: Dict[LoyaltyTier, Decimal] = field(default_factory=_default_thresholds)
    enabled: bool = True

    def tier_for(self, total_spent: Decimal) -> LoyaltyTier:
        """Descending threshold comparison, bronze when nothing matches"""
        for tier in (LoyaltyTier.PLATINUM, LoyaltyTier.GOLD, LoyaltyTier.SILVER):
            if total_spent >= self.tier_thresholds[tier]:
                return tier
        return LoyaltyTier.BRONZE

    def multiplier_for(self, tier: LoyaltyTier) -> Decimal:
        return self.tier_multipliers.get(tier, Decimal("1"))

    def points_for(self, amount: Decimal, tier: LoyaltyTier) -> int:
        """floor(floor(amount × rate) × multiplier)"""
        base_points = (amount * self.points_per_currency_unit).to_integral_value(rounding=ROUND_FLOOR)
        earned = (base_points * self.multiplier_for(tier)).to_integral_value(rounding=ROUND_FLOOR)
        return max(0, int(earned))

    def redemption_amount(self, points: int) -> Decimal:
        return Decimal(points) / Decimal(self.points_for_redemption) * self.redemption_value

    def to_dict(self) -> dict:
        return {
            "points_per_currency_unit": str(self.points_per_currency_unit),
            "points_for_redemption": self.points_for_redemption,
            "redemption_value": str(self.redemption_value),
            "welcome_bonus": self.welcome_bonus,
            "birthday_bonus": self.birthday_bonus,
            "tier_multipliers": {t.value: str(v) for t, v in self.tier_multipliers.items()},
            "tier_thresholds": {t.value: str(v) for t, v in self.tier_thresholds.items()},
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LoyaltySettings":
        defaults = cls()
        return cls(
            points_per_currency_unit=Decimal(
                str(data.get("points_per_currency_unit", defaults.points_per_currency_unit))
            ),
            points_for_redemption=int(
                data.get("points_for_redemption", defaults.points_for_redemption)
            ),
            redemption_value=Decimal(str(data.get("redemption_value", defaults.redemption_value))),
            welcome_bonus=int(data.get("welcome_bonus", defaults.welcome_bonus)),
            birthday_bonus=int(data.get("birthday_bonus", defaults.birthday_bonus)),
            tier_multipliers=_decimal_map(data.get("tier_multipliers"), defaults.tier_multipliers),
            tier_thresholds=_decimal_map(data.get("tier_thresholds"), defaults.tier_thresholds),
            enabled=bool(data.get("enabled", True)),
        )


@dataclass
class LoyaltySettingsPatch:
    """Partial settings update; per-tier tables merge key by key"""

    points_per_currency_unit: Optional[Decimal] = None
    points_for_redemption: Optional[int] = None
    redemption_value: Optional[Decimal] = None
    welcome_bonus: Optional[int] = None
    birthday_bonus: Optional[int] = None
    tier_multipliers: Optional[Dict[LoyaltyTier, Decimal]] = None
    tier_thresholds: Optional[Dict[LoyaltyTier, Decimal]] = None
    enabled: Optional[bool] = None

    def apply_to(self, settings: LoyaltySettings) -> LoyaltySettings:
        if self.points_per_currency_unit is not None:
            if self.points_per_currency_unit < 0:
                raise ValueError("Points per currency unit cannot be negative")
            settings.points_per_currency_unit = Decimal(str(self.points_per_currency_unit))
        if self.points_for_redemption is not None:
            if self.points_for_redemption <= 0:
                raise ValueError("Points required for redemption must be positive")
            settings.points_for_redemption = self.points_for_redemption
        if self.redemption_value is not None:
            settings.redemption_value = Decimal(str(self.redemption_value))
        if self.welcome_bonus is not None:
            settings.welcome_bonus = max(0, self.welcome_bonus)
        if self.birthday_bonus is not None:
            settings.birthday_bonus = max(0, self.birthday_bonus)
        if self.tier_multipliers:
            settings.tier_multipliers = _decimal_map(self.tier_multipliers, settings.tier_multipliers)
        if self.tier_thresholds:
            settings.tier_thresholds = _decimal_map(self.tier_thresholds, settings.tier_thresholds)
        if self.enabled is not None:
            settings.enabled = self.enabled
        return settings


@dataclass
class LoyaltyCustomer:
    """Loyalty customer, keyed by phone number"""

    id: str
    phone_number: PhoneNumber
    name: str
    points: int = 0
    total_spent: Money = field(default_factory=Money.zero)
    visit_count: int = 0
    join_date: datetime = field(default_factory=utc_now)
    last_visit: datetime = field(default_factory=utc_now)
    tier: LoyaltyTier = LoyaltyTier.BRONZE
    is_active: bool = True

    @classmethod
    def create(cls, name: str, phone_number: PhoneNumber, points: int = 0,
               currency: str = DEFAULT_CURRENCY) -> "LoyaltyCustomer":
        now = utc_now()
        return cls(
            id=new_id(),
            phone_number=phone_number,
            name=name,
            points=points,
            total_spent=Money.zero(currency),
            join_date=now,
            last_visit=now,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "phone_number": self.phone_number.value,
            "name": self.name,
            "points": self.points,
            "total_spent": self.total_spent.to_dict(),
            "visit_count": self.visit_count,
            "join_date": dump_datetime(self.join_date),
            "last_visit": dump_datetime(self.last_visit),
            "tier": self.tier.value,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LoyaltyCustomer":
        return cls(
            id=data["id"],
            phone_number=PhoneNumber(data["phone_number"]),
            name=data.get("name", ""),
            points=int(data.get("points", 0)),
            total_spent=Money.from_dict(data.get("total_spent", 0)),
            visit_count=int(data.get("visit_count", 0)),
            join_date=load_datetime(data.get("join_date")) or utc_now(),
            last_visit=load_datetime(data.get("last_visit")) or utc_now(),
            tier=LoyaltyTier(data.get("tier", LoyaltyTier.BRONZE.value)),
            is_active=bool(data.get("is_active", True)),
        )


@dataclass
class CustomerPatch:
    name: Optional[str] = None
    phone_number: Optional[PhoneNumber] = None
    points: Optional[int] = None
    total_spent: Optional[Money] = None
    is_active: Optional[bool] = None

    def apply_to(self, customer: LoyaltyCustomer) -> LoyaltyCustomer:
        if self.name is not None:
            customer.name = self.name
        if self.phone_number is not None:
            customer.phone_number = self.phone_number
        if self.points is not None:
            customer.points = max(0, self.points)
        if self.total_spent is not None:
            customer.total_spent = self.total_spent
        if self.is_active is not None:
            customer.is_active = self.is_active
        return customer


@dataclass(frozen=True)
class LoyaltyTransaction:
    """Immutable ledger entry; points are negative for redemptions"""

    id: str
    customer_id: str
    order_id: str
    type: TransactionType
    points: int
    amount: Money
    description: str
    created_at: datetime

    @classmethod
    def record(cls, customer_id: str, order_id: str, type_: TransactionType, points: int,
               amount: Money, description: str) -> "LoyaltyTransaction":
        return cls(
            id=new_id(),
            customer_id=customer_id,
            order_id=order_id,
            type=type_,
            points=points,
            amount=amount,
            description=description,
            created_at=utc_now(),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "order_id": self.order_id,
            "type": self.type.value,
            "points": self.points,
            "amount": self.amount.to_dict(),
            "description": self.description,
            "created_at": dump_datetime(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LoyaltyTransaction":
        return cls(
            id=data["id"],
            customer_id=data["customer_id"],
            order_id=str(data.get("order_id", "")),
            type=TransactionType(data["type"]),
            points=int(data["points"]),
            amount=Money.from_dict(data.get("amount", 0)),
            description=data.get("description", ""),
            created_at=load_datetime(data.get("created_at")) or utc_now(),
        )
