"""
Notification Service

Fire-and-forget dispatch of staff events ("new order", "order ready",
"low stock", "greeting") to the configured channels, gated by the persisted
notification settings.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol

from skadam.domain.entities.notification_entity import (
    NotificationEvent,
    NotificationSettings,
    NotificationSettingsPatch,
)
from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter
from skadam.infrastructure.services.notification_utils import format_notification
from skadam.infrastructure.utilities.constants import StorageKeys


class NotificationChannel(Protocol):
    def send(self, event: NotificationEvent, payload: Dict[str, Any]) -> None:
        ...


class LoggingNotificationChannel:
    """Writes every notification to the application log"""

    def __init__(self):
        self._logger = logging.getLogger(self.__class__.__name__)

    def send(self, event: NotificationEvent, payload: Dict[str, Any]) -> None:
        self._logger.info("📨 %s: %s", event.value, format_notification(event, payload))


class NotificationDispatcher:
    """Routes events to channels; a failing channel never affects the caller"""

    def __init__(
        self,
        writer: Optional[PersistenceWriter] = None,
        channels: Optional[List[NotificationChannel]] = None,
    ):
        self._writer = writer
        self._channels: List[NotificationChannel] = (
            list(channels) if channels is not None else [LoggingNotificationChannel()]
        )
        self.settings = NotificationSettings()
        self._logger = logging.getLogger(self.__class__.__name__)

    def load(self) -> None:
        if self._writer is None:
            return
        stored = self._writer.load(StorageKeys.NOTIFICATION_SETTINGS)
        if isinstance(stored, dict):
            self.settings = NotificationSettings.from_dict(stored)

    def add_channel(self, channel: NotificationChannel) -> None:
        self._channels.append(channel)

    def update_settings(self, patch: NotificationSettingsPatch) -> NotificationSettings:
        patch.apply_to(self.settings)
        if self._writer is not None:
            self._writer.persist(StorageKeys.NOTIFICATION_SETTINGS, self.settings.to_dict())
        return self.settings

    def dispatch(self, event: NotificationEvent, payload: Dict[str, Any]) -> bool:
        """Returns False when the event type is switched off"""
        if not self.settings.allows(event):
            self._logger.debug("🔕 %s notifications disabled", event.value)
            return False

        for channel in self._channels:
            try:
                channel.send(event, payload)
            except Exception as e:  # pylint: disable=broad-exception-caught
                self._logger.error(
                    "💥 Notification channel %s failed for %s: %s",
                    type(channel).__name__,
                    event.value,
                    e,
                )
        return True
