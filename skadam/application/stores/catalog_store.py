"""
Catalog Store

Menu items, categories and per-item inventory.
"""

from typing import Dict, List, Optional

from skadam.application.stores.base_store import PersistentStore, domain_validation
from skadam.application.stores.seed_data import DEFAULT_CATEGORIES, DEFAULT_MENU_ITEMS
from skadam.domain.entities.catalog_entity import (
    Category,
    CategoryPatch,
    Inventory,
    InventorySettingsPatch,
    MenuItem,
    MenuItemPatch,
)
from skadam.domain.entities.order_entity import OrderLine
from skadam.domain.value_objects.money import DEFAULT_CURRENCY, Money
from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter
from skadam.infrastructure.utilities.constants import StorageKeys
from skadam.infrastructure.utilities.exceptions import ValidationError


class CatalogStore(PersistentStore):
    """Owns menu items and categories. Missing ids make updates a no-op."""

    def __init__(
        self,
        writer: PersistenceWriter,
        seed_defaults: bool = True,
        currency: str = DEFAULT_CURRENCY,
    ):
        super().__init__(writer)
        self._seed_defaults = seed_defaults
        self._currency = currency
        self._items: List[MenuItem] = []
        self._categories: List[Category] = []

    def load(self) -> None:
        items = self._load_records(StorageKeys.MENU_ITEMS, MenuItem.from_dict)
        categories = self._load_records(StorageKeys.CATEGORIES, Category.from_dict)

        if items is None and self._seed_defaults:
            items = [self._seed_item(data) for data in DEFAULT_MENU_ITEMS]
        if categories is None and self._seed_defaults:
            categories = [Category.from_dict(data) for data in DEFAULT_CATEGORIES]

        self._items = items or []
        self._categories = categories or []
        self._logger.info(
            "📋 Catalog loaded: %d items, %d categories", len(self._items), len(self._categories)
        )

    def _seed_item(self, data: dict) -> MenuItem:
        """Seed prices carry a TND suffix; the amount is kept in the configured currency"""
        item = MenuItem.from_dict(data)
        item.price = Money(item.price.amount, self._currency)
        return item

    # Menu items

    def get_item(self, item_id: str) -> Optional[MenuItem]:
        return next((item for item in self._items if item.id == item_id), None)

    def list_items(self, category_id: Optional[str] = None) -> List[MenuItem]:
        if category_id is None:
            return list(self._items)
        return [item for item in self._items if item.category_id == category_id]

    def list_popular(self) -> List[MenuItem]:
        return [item for item in self._items if item.popular]

    def add_item(
        self,
        name: str,
        description: str,
        price: Money,
        category_id: str,
        image: str = "",
        popular: bool = False,
        ingredients: Optional[List[str]] = None,
        inventory: Optional[Inventory] = None,
    ) -> MenuItem:
        with domain_validation():
            item = MenuItem.create(
                name=name or "",
                description=description,
                price=price,
                category_id=category_id,
                image=image,
                popular=popular,
                ingredients=ingredients,
                inventory=inventory,
            )
        self._items.append(item)
        self._persist(StorageKeys.MENU_ITEMS, self._items)
        self._logger.info("➕ Menu item added: %s (%s)", item.name, item.id)
        return item

    def update_item(self, item_id: str, patch: MenuItemPatch) -> Optional[MenuItem]:
        item = self.get_item(item_id)
        if item is None:
            return None
        with domain_validation():
            patch.apply_to(item)
        self._persist(StorageKeys.MENU_ITEMS, self._items)
        return item

    def delete_item(self, item_id: str) -> bool:
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        self._persist(StorageKeys.MENU_ITEMS, self._items)
        self._logger.info("🗑️ Menu item deleted: %s", item_id)
        return True

    # Inventory

    def set_inventory_quantity(self, item_id: str, quantity: int) -> Optional[MenuItem]:
        """Negative quantities clamp to zero; creates the inventory record if absent"""
        item = self.get_item(item_id)
        if item is None:
            return None
        if item.inventory is None:
            item.inventory = Inventory(quantity=quantity)
        else:
            item.inventory.set_quantity(quantity)
        self._persist(StorageKeys.MENU_ITEMS, self._items)
        return item

    def set_inventory_settings(
        self, item_id: str, patch: InventorySettingsPatch
    ) -> Optional[MenuItem]:
        item = self.get_item(item_id)
        if item is None:
            return None
        item.inventory = patch.apply_to(item.inventory)
        self._persist(StorageKeys.MENU_ITEMS, self._items)
        return item

    def list_low_stock(self) -> List[MenuItem]:
        return [item for item in self._items if item.inventory and item.inventory.is_low()]

    def snapshot_line(self, item_id: str, quantity: int) -> OrderLine:
        """Copy the item's current name, price and image into an order line"""
        item = self.get_item(item_id)
        if item is None:
            raise ValidationError(f"Unknown menu item: {item_id}", "menu_item_id")
        with domain_validation("quantity"):
            return OrderLine(
                menu_item_id=item.id,
                name=item.name,
                price=item.price,
                quantity=quantity,
                image=item.image,
            )

    def deduct_inventory(self, quantities: Dict[str, int]) -> List[MenuItem]:
        """
        Reserve stock for an order. Items without inventory are untouched.

        Returns the deducted items that are now at or below their alert threshold.
        """
        low_stock = []
        touched = False
        for item_id, quantity in quantities.items():
            item = self.get_item(item_id)
            if item is None or item.inventory is None:
                continue
            item.inventory.deduct(quantity)
            touched = True
            if item.inventory.is_low():
                low_stock.append(item)
        if touched:
            self._persist(StorageKeys.MENU_ITEMS, self._items)
        return low_stock

    # Categories

    def get_category(self, category_id: str) -> Optional[Category]:
        return next((c for c in self._categories if c.id == category_id), None)

    def list_categories(self) -> List[Category]:
        return list(self._categories)

    def add_category(
        self, name: str, description: str = "", image: str = "", color: str = ""
    ) -> Category:
        with domain_validation("name"):
            category = Category.create(name or "", description, image, color)
        self._categories.append(category)
        self._persist(StorageKeys.CATEGORIES, self._categories)
        return category

    def update_category(self, category_id: str, patch: CategoryPatch) -> Optional[Category]:
        category = self.get_category(category_id)
        if category is None:
            return None
        with domain_validation("name"):
            patch.apply_to(category)
        self._persist(StorageKeys.CATEGORIES, self._categories)
        return category

    def delete_category(self, category_id: str) -> bool:
        remaining = [c for c in self._categories if c.id != category_id]
        if len(remaining) == len(self._categories):
            return False
        self._categories = remaining
        self._persist(StorageKeys.CATEGORIES, self._categories)
        return True
