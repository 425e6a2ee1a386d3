"""
Notification Tests
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram.error import TelegramError

from skadam.domain.entities.notification_entity import NotificationEvent, NotificationSettingsPatch
from skadam.infrastructure.services.notification_service import NotificationDispatcher
from skadam.infrastructure.services.notification_utils import (
    TelegramNotificationChannel,
    format_notification,
    send_telegram_message,
)
from skadam.infrastructure.utilities.constants import StorageKeys


class TestFormatting:
    def test_new_order_message(self, sample_order):
        message = format_notification(NotificationEvent.NEW_ORDER, sample_order.to_dict())
        assert "New order #1" in message
        assert "Table: 4" in message
        assert "• 2x Latte - 10.00 TND" in message
        assert "25.00 TND" in message

    def test_note_included(self, sample_order):
        payload = dict(sample_order.to_dict(), customer_note="No sugar")
        assert "📝 Note: No sugar" in format_notification(NotificationEvent.NEW_ORDER, payload)

    def test_low_stock_message(self):
        message = format_notification(
            NotificationEvent.LOW_STOCK,
            {"item_id": "x", "name": "Latte", "quantity": 3, "alert_threshold": 5, "unit": "cups"},
        )
        assert "Latte" in message
        assert "3 cups left" in message


class TestNotificationDispatcher:
    """Gating by settings and channel isolation"""

    def test_disabled_event_is_not_sent(self, notifier, channel):
        notifier.update_settings(NotificationSettingsPatch(inventory_notifications=False))
        assert notifier.dispatch(NotificationEvent.LOW_STOCK, {}) is False
        channel.send.assert_not_called()
        assert notifier.dispatch(NotificationEvent.NEW_ORDER, {"n": 1}) is True
        channel.send.assert_called_once_with(NotificationEvent.NEW_ORDER, {"n": 1})

    def test_customer_setting_gates_ready_and_greeting(self, notifier, channel):
        notifier.update_settings(NotificationSettingsPatch(customer_notifications=False))
        assert notifier.dispatch(NotificationEvent.ORDER_READY, {}) is False
        assert notifier.dispatch(NotificationEvent.GREETING, {}) is False
        channel.send.assert_not_called()

    def test_failing_channel_does_not_stop_others(self, notifier, channel):
        broken = MagicMock()
        broken.send.side_effect = RuntimeError("offline")
        notifier = NotificationDispatcher(channels=[broken, channel])
        assert notifier.dispatch(NotificationEvent.NEW_ORDER, {}) is True
        channel.send.assert_called_once()

    def test_settings_persist(self, writer, storage, notifier):
        notifier.update_settings(NotificationSettingsPatch(sound_enabled=False))
        assert storage.get(StorageKeys.NOTIFICATION_SETTINGS)["data"]["sound_enabled"] is False

        reloaded = NotificationDispatcher(writer=writer, channels=[])
        reloaded.load()
        assert reloaded.settings.sound_enabled is False
        assert reloaded.settings.order_notifications is True


class TestTelegramChannel:
    @pytest.mark.asyncio
    async def test_send_message(self):
        bot = AsyncMock()
        await send_telegram_message(bot, 42, "hello", logging.getLogger("test"))
        bot.send_message.assert_awaited_once_with(chat_id=42, text="hello", parse_mode="HTML")

    @pytest.mark.asyncio
    async def test_telegram_error_is_logged(self, caplog):
        bot = AsyncMock()
        bot.send_message.side_effect = TelegramError("chat not found")
        with caplog.at_level(logging.ERROR):
            await send_telegram_message(bot, 42, "hello", logging.getLogger("test"))
        assert "chat not found" in caplog.text

    def test_channel_delivers_in_background(self, sample_order):
        bot = AsyncMock()
        channel = TelegramNotificationChannel(bot, chat_id=7)
        channel.send(NotificationEvent.ORDER_READY, sample_order.to_dict())
        channel.close()

        bot.send_message.assert_awaited_once()
        kwargs = bot.send_message.call_args.kwargs
        assert kwargs["chat_id"] == 7
        assert "Order #1 is ready" in kwargs["text"]
