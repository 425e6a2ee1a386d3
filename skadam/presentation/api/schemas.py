"""
Request bodies of the staff/admin HTTP API
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from skadam.domain.entities.loyalty_entity import LoyaltyTier
from skadam.domain.entities.order_entity import OrderStatus
from skadam.domain.entities.store_entity import SocialPlatform, Weekday


class MenuItemCreate(BaseModel):
    name: str
    description: str = ""
    price: Decimal = Field(ge=0)
    category_id: str
    image: str = ""
    popular: bool = False
    ingredients: List[str] = Field(default_factory=list)


class MenuItemUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    category_id: Optional[str] = None
    image: Optional[str] = None
    popular: Optional[bool] = None
    ingredients: Optional[List[str]] = None


class InventoryQuantityUpdate(BaseModel):
    quantity: int


class InventorySettingsUpdate(BaseModel):
    alert_enabled: bool
    alert_threshold: Optional[int] = Field(default=None, ge=0)
    unit: Optional[str] = None


class CategoryCreate(BaseModel):
    name: str
    description: str = ""
    image: str = ""
    color: str = ""


class OrderLineIn(BaseModel):
    menu_item_id: str
    quantity: int = Field(gt=0)


class OrderCreate(BaseModel):
    lines: List[OrderLineIn]
    table_number: int
    customer_note: Optional[str] = None


class StatusUpdate(BaseModel):
    status: OrderStatus


class SettleBody(BaseModel):
    phone_number: Optional[str] = None
    promo_code: Optional[str] = None


class CustomerCreate(BaseModel):
    name: str
    phone_number: str


class RedeemBody(BaseModel):
    order_id: str
    points: int = Field(gt=0)


class LoyaltySettingsUpdate(BaseModel):
    points_per_currency_unit: Optional[Decimal] = None
    points_for_redemption: Optional[int] = None
    redemption_value: Optional[Decimal] = None
    welcome_bonus: Optional[int] = None
    birthday_bonus: Optional[int] = None
    tier_multipliers: Optional[Dict[LoyaltyTier, Decimal]] = None
    tier_thresholds: Optional[Dict[LoyaltyTier, Decimal]] = None
    enabled: Optional[bool] = None


class PromoCodeCreate(BaseModel):
    code: str
    discount_percentage: int
    description: str = ""
    max_usage: Optional[int] = None
    expires_at: Optional[datetime] = None

    @field_validator("expires_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class QuizAttemptCreate(BaseModel):
    user_id: str
    answers: Dict[str, int]


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: str


class SubUserCreate(BaseModel):
    username: str
    password: str
    name: str = ""


class NotificationSettingsUpdate(BaseModel):
    order_notifications: Optional[bool] = None
    inventory_notifications: Optional[bool] = None
    customer_notifications: Optional[bool] = None
    sound_enabled: Optional[bool] = None


class OpeningHoursIn(BaseModel):
    day: Weekday
    is_open: bool
    open_time: str
    close_time: str


class StoreSettingsUpdate(BaseModel):
    store_description: Optional[str] = None
    opening_hours: Optional[List[OpeningHoursIn]] = None


class SocialLinkCreate(BaseModel):
    platform: SocialPlatform
    url: str
    is_active: bool = True


class SocialLinkUpdate(BaseModel):
    platform: Optional[SocialPlatform] = None
    url: Optional[str] = None
    is_active: Optional[bool] = None
