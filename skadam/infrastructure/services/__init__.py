"""
Notification services
"""

from skadam.infrastructure.services.notification_service import (
    LoggingNotificationChannel,
    NotificationDispatcher,
)
from skadam.infrastructure.services.notification_utils import TelegramNotificationChannel

__all__ = ["LoggingNotificationChannel", "NotificationDispatcher", "TelegramNotificationChannel"]
