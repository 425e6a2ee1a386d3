"""
Staff notification events and their on/off switches
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NotificationEvent(str, Enum):
    NEW_ORDER = "new_order"
    ORDER_READY = "order_ready"
    LOW_STOCK = "low_stock"
    GREETING = "greeting"


@dataclass
class NotificationSettings:
    order_notifications: bool = True
    inventory_notifications: bool = True
    customer_notifications: bool = True
    sound_enabled: bool = True

    def allows(self, event: NotificationEvent) -> bool:
        if event is NotificationEvent.NEW_ORDER:
            return self.order_notifications
        if event is NotificationEvent.LOW_STOCK:
            return self.inventory_notifications
        return self.customer_notifications

    def to_dict(self) -> dict:
        return {
            "order_notifications": self.order_notifications,
            "inventory_notifications": self.inventory_notifications,
            "customer_notifications": self.customer_notifications,
            "sound_enabled": self.sound_enabled,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NotificationSettings":
        defaults = cls()
        return cls(**{key: bool(data.get(key, value)) for key, value in defaults.to_dict().items()})


@dataclass
class NotificationSettingsPatch:
    order_notifications: Optional[bool] = None
    inventory_notifications: Optional[bool] = None
    customer_notifications: Optional[bool] = None
    sound_enabled: Optional[bool] = None

    def apply_to(self, settings: NotificationSettings) -> NotificationSettings:
        for name, value in vars(self).items():
            if value is not None:
                setattr(settings, name, value)
        return settings
