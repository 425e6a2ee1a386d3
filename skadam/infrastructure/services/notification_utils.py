"""
Notification Utilities

Message formatting for staff notifications and the Telegram channel.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict

from telegram import Bot
from telegram.error import TelegramError

from skadam.domain.entities.notification_entity import NotificationEvent

STATUS_EMOJI = {
    "pending": "⏳",
    "preparing": "👨‍🍳",
    "ready": "🛎️",
    "completed": "✅",
    "paid": "💳",
}


def format_order_lines(order: Dict[str, Any]) -> str:
    """One bullet per order line"""
    lines = []
    for line in order.get("lines", []):
        price = line["price"]
        lines.append(
            f"• {line['quantity']}x {line['name']} - {price['amount']} {price['currency']}"
        )
    return "\n".join(lines)


def format_notification(event: NotificationEvent, payload: Dict[str, Any]) -> str:
    """Render a staff-facing message for an event payload"""
    if event is NotificationEvent.NEW_ORDER:
        status_emoji = STATUS_EMOJI.get(payload.get("status", ""), "📋")
        message = (
            f"🆕 <b>New order #{payload['order_number']}</b>\n"
            f"🪑 Table: {payload['table_number']}\n"
            f"{status_emoji} Status: {payload.get('status', 'pending').title()}\n\n"
            f"{format_order_lines(payload)}\n\n"
            f"💳 <b>Total:</b> {payload['total']} {payload.get('currency', '')}".rstrip()
        )
        if payload.get("customer_note"):
            message += f"\n📝 Note: {payload['customer_note']}"
        return message
    if event is NotificationEvent.ORDER_READY:
        return (
            f"🛎️ <b>Order #{payload['order_number']} is ready</b>\n"
            f"🪑 Table: {payload['table_number']}"
        )
    if event is NotificationEvent.LOW_STOCK:
        return (
            f"⚠️ <b>Low stock:</b> {payload['name']}\n"
            f"📦 {payload['quantity']} {payload['unit']} left "
            f"(alert at {payload['alert_threshold']})"
        )
    return (
        f"👋 Welcome! Your order #{payload['order_number']} for table "
        f"{payload['table_number']} has been received."
    )


async def send_telegram_message(
    bot: Bot, chat_id: int, text: str, logger: logging.Logger
) -> None:
    """Sends a message using the Telegram bot."""
    try:
        await bot.send_message(chat_id=chat_id, text=text, parse_mode="HTML")
        logger.info("✅ Notification sent to %s", chat_id)
    except TelegramError as e:
        logger.error("💥 Failed to send notification to %s: %s", chat_id, e)


class TelegramNotificationChannel:
    """
    Staff notifications over Telegram.

    The stores are synchronous, so each message is sent on a dedicated worker
    thread with its own event loop and the caller never waits for delivery.
    """

    def __init__(self, bot: Bot, chat_id: int):
        self._bot = bot
        self._chat_id = chat_id
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="skadam-telegram")
        self._logger = logging.getLogger(self.__class__.__name__)
        self._logger.info("🏗️ TELEGRAM CHANNEL INITIALIZED for chat %s", chat_id)

    def send(self, event: NotificationEvent, payload: Dict[str, Any]) -> None:
        text = format_notification(event, payload)
        self._executor.submit(asyncio.run, self.deliver(text))

    async def deliver(self, text: str) -> None:
        await send_telegram_message(self._bot, self._chat_id, text, self._logger)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
