"""
Domain entities
"""

from skadam.domain.entities.catalog_entity import (
    Category,
    CategoryPatch,
    Inventory,
    InventorySettingsPatch,
    MenuItem,
    MenuItemPatch,
)
from skadam.domain.entities.loyalty_entity import (
    CustomerPatch,
    LoyaltyCustomer,
    LoyaltySettings,
    LoyaltySettingsPatch,
    LoyaltyTier,
    LoyaltyTransaction,
    TransactionType,
)
from skadam.domain.entities.notification_entity import (
    NotificationEvent,
    NotificationSettings,
    NotificationSettingsPatch,
)
from skadam.domain.entities.order_entity import Order, OrderLine, OrderStatus
from skadam.domain.entities.promotion_entity import (
    PromoCode,
    PromoCodePatch,
    PromoOrigin,
    QuizAttempt,
    QuizQuestion,
    QuizQuestionPatch,
)
from skadam.domain.entities.staff_entity import SubUser, SubUserPatch
from skadam.domain.entities.store_entity import (
    OpeningHours,
    SocialMediaLink,
    SocialMediaLinkPatch,
    SocialPlatform,
    StoreSettings,
    StoreSettingsPatch,
    Weekday,
)

__all__ = [
    "Category",
    "CategoryPatch",
    "CustomerPatch",
    "Inventory",
    "InventorySettingsPatch",
    "LoyaltyCustomer",
    "LoyaltySettings",
    "LoyaltySettingsPatch",
    "LoyaltyTier",
    "LoyaltyTransaction",
    "MenuItem",
    "MenuItemPatch",
    "NotificationEvent",
    "NotificationSettings",
    "NotificationSettingsPatch",
    "OpeningHours",
    "Order",
    "OrderLine",
    "OrderStatus",
    "PromoCode",
    "PromoCodePatch",
    "PromoOrigin",
    "QuizAttempt",
    "QuizQuestion",
    "QuizQuestionPatch",
    "SocialMediaLink",
    "SocialMediaLinkPatch",
    "SocialPlatform",
    "StoreSettings",
    "StoreSettingsPatch",
    "SubUser",
    "SubUserPatch",
    "Weekday",
]
