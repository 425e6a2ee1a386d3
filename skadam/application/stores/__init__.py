"""
Application stores
"""

from skadam.application.stores.catalog_store import CatalogStore
from skadam.application.stores.loyalty_store import LoyaltyStore
from skadam.application.stores.order_store import OrderStore
from skadam.application.stores.promotion_store import PromotionStore
from skadam.application.stores.quiz_store import QuizStore
from skadam.application.stores.staff_store import StaffStore
from skadam.application.stores.store_settings_store import StoreSettingsStore

__all__ = [
    "CatalogStore",
    "LoyaltyStore",
    "OrderStore",
    "PromotionStore",
    "QuizStore",
    "StaffStore",
    "StoreSettingsStore",
]
