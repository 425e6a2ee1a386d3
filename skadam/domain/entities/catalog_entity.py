# pylint: disable=too-many-instance-attributes
"""
Catalog entities - menu items, their inventory, and categories
"""

from dataclasses import dataclass, field
from typing import List, Optional

from skadam.domain.entities.base import new_id
from skadam.domain.value_objects.money import Money

DEFAULT_ALERT_THRESHOLD = 5
DEFAULT_UNIT = "units"


@dataclass
class Inventory:
    """Stock level of a menu item. Quantity is clamped at zero on every mutation."""

    quantity: int = 0
    alert_threshold: int = DEFAULT_ALERT_THRESHOLD
    alert_enabled: bool = False
    unit: str = DEFAULT_UNIT

    def __post_init__(self):
        self.quantity = max(0, int(self.quantity))

    def set_quantity(self, quantity: int) -> None:
        self.quantity = max(0, int(quantity))

    def deduct(self, quantity: int) -> None:
        self.quantity = max(0, self.quantity - int(quantity))

    def is_low(self) -> bool:
        """Alerting is on and stock is at or below the threshold"""
        return self.alert_enabled and self.quantity <= self.alert_threshold

    def to_dict(self) -> dict:
        return {
            "quantity": self.quantity,
            "alert_threshold": self.alert_threshold,
            "alert_enabled": self.alert_enabled,
            "unit": self.unit,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Inventory":
        return cls(
            quantity=data.get("quantity", 0),
            alert_threshold=data.get("alert_threshold", DEFAULT_ALERT_THRESHOLD),
            alert_enabled=data.get("alert_enabled", False),
            unit=data.get("unit") or DEFAULT_UNIT,
        )


@dataclass
class InventorySettingsPatch:
    """Alert settings update. Unset threshold/unit keep the existing values."""

    alert_enabled: bool
    alert_threshold: Optional[int] = None
    unit: Optional[str] = None

    def apply_to(self, inventory: Optional[Inventory]) -> Inventory:
        current = inventory or Inventory()
        return Inventory(
            quantity=current.quantity,
            alert_threshold=(
                self.alert_threshold
                if self.alert_threshold is not None
                else current.alert_threshold
            ),
            alert_enabled=self.alert_enabled,
            unit=self.unit or current.unit or DEFAULT_UNIT,
        )


@dataclass
class MenuItem:
    """Menu item domain entity"""

    id: str
    name: str
    description: str
    price: Money
    category_id: str
    image: str = ""
    popular: bool = False
    ingredients: List[str] = field(default_factory=list)
    inventory: Optional[Inventory] = None

    def __post_init__(self):
        """Validate the menu item after initialization"""
        if not self.name or not self.name.strip():
            raise ValueError("Menu item name cannot be empty")
        if not self.category_id:
            raise ValueError("Menu item category cannot be empty")

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        price: Money,
        category_id: str,
        image: str = "",
        popular: bool = False,
        ingredients: Optional[List[str]] = None,
        inventory: Optional[Inventory] = None,
    ) -> "MenuItem":
        """Create a new menu item with a fresh id"""
        return cls(
            id=new_id(),
            name=name.strip(),
            description=description,
            price=price,
            category_id=category_id,
            image=image,
            popular=popular,
            ingredients=list(ingredients or []),
            inventory=inventory,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary representation"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price.to_dict(),
            "category_id": self.category_id,
            "image": self.image,
            "popular": self.popular,
            "ingredients": list(self.ingredients),
            "inventory": self.inventory.to_dict() if self.inventory else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MenuItem":
        inventory = data.get("inventory")
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            price=Money.from_dict(data["price"]),
            category_id=data["category_id"],
            image=data.get("image", ""),
            popular=data.get("popular", False),
            ingredients=list(data.get("ingredients") or []),
            inventory=Inventory.from_dict(inventory) if inventory else None,
        )


@dataclass
class MenuItemPatch:
    """Partial menu item update; None means unchanged"""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Money] = None
    category_id: Optional[str] = None
    image: Optional[str] = None
    popular: Optional[bool] = None
    ingredients: Optional[List[str]] = None

    def apply_to(self, item: MenuItem) -> MenuItem:
        if self.name is not None:
            if not self.name.strip():
                raise ValueError("Menu item name cannot be empty")
            item.name = self.name.strip()
        if self.description is not None:
            item.description = self.description
        if self.price is not None:
            item.price = self.price
        if self.category_id is not None:
            item.category_id = self.category_id
        if self.image is not None:
            item.image = self.image
        if self.popular is not None:
            item.popular = self.popular
        if self.ingredients is not None:
            item.ingredients = list(self.ingredients)
        return item


@dataclass
class Category:
    """Menu category"""

    id: str
    name: str
    description: str = ""
    image: str = ""
    color: str = ""

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Category name cannot be empty")

    @classmethod
    def create(cls, name: str, description: str = "", image: str = "", color: str = "") -> "Category":
        return cls(id=new_id(), name=name.strip(), description=description, image=image, color=color)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "image": self.image,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            image=data.get("image", ""),
            color=data.get("color", ""),
        )


@dataclass
class CategoryPatch:
    """Partial category update; None means unchanged"""

    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    color: Optional[str] = None

    def apply_to(self, category: Category) -> Category:
        if self.name is not None:
            if not self.name.strip():
                raise ValueError("Category name cannot be empty")
            category.name = self.name.strip()
        if self.description is not None:
            category.description = self.description
        if self.image is not None:
            category.image = self.image
        if self.color is not None:
            category.color = self.color
        return category
