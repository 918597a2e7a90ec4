# price_watcher/notifications/telegram_notifier.py

"""Broadcast price changes to Telegram subscribers."""

import logging
from decimal import Decimal

from aiogram import Bot

from price_watcher.config.settings import Settings
from price_watcher.models.price_check_result import PriceCheckResult
from price_watcher.storage.price_storage import PriceStorage

logger = logging.getLogger("price_watcher.notifier")

_TR_SEPARATORS = str.maketrans({",": ".", ".": ","})


def format_price(price: Decimal, currency: str = Settings.CURRENCY_LABEL) -> str:
    """Format *price* the Turkish way, e.g. ``36.499,00 TL``."""
    return f"{price:,.2f}".translate(_TR_SEPARATORS) + f" {currency}"


def build_price_message(result: PriceCheckResult) -> str:
    """Human readable notification text for one check result."""
    old = (
        format_price(result.old_price)
        if result.old_price is not None
        else "-"
    )
    lines = [
        "Price update:",
        f"Product: {result.product_url}",
        f"Old price: {old}",
        f"New price: {format_price(result.new_price)}",
        f"Change: {result.change_rate_display}",
        f"Checked at: {result.checked_at:%d.%m.%Y %H:%M:%S}",
    ]
    return "\n".join(lines)


class TelegramNotifier:
    """Best-effort delivery of price changes and admin messages.

    ``bot`` may be None when no token is configured; every delivery is
    then logged and skipped.
    """

    def __init__(
        self,
        bot: Bot | None,
        storage: PriceStorage,
        admin_chat_id: str = "",
    ) -> None:
        self.bot = bot
        self.storage = storage
        self.admin_chat_id = admin_chat_id

    async def notify_price_change(self, result: PriceCheckResult) -> int:
        """Send *result* to every active subscriber.

        A failed send is logged and the remaining subscribers are still
        served. Returns the number of successful deliveries.
        """
        if self.bot is None:
            logger.warning(
                "Telegram is not configured; skipping notification for %s",
                result.product_url,
            )
            return 0

        message = build_price_message(result)
        subscribers = await self.storage.list_active_subscribers()
        delivered = 0
        for subscriber in subscribers:
            try:
                await self.bot.send_message(
                    chat_id=subscriber.chat_id, text=message
                )
                delivered += 1
            except Exception as exc:
                logger.error(
                    "Failed to send notification to chat %d: %s",
                    subscriber.chat_id,
                    exc,
                    exc_info=True,
                )
        logger.info(
            "Notified %d/%d subscribers about %s",
            delivered,
            len(subscribers),
            result.product_url,
        )
        return delivered

    def _admin_chat(self) -> int | None:
        try:
            chat_id = int(self.admin_chat_id.strip())
        except ValueError:
            return None
        return chat_id or None

    async def notify_admin(self, message: str) -> bool:
        """Send *message* to the configured admin chat, if any."""
        chat_id = self._admin_chat()
        if chat_id is None or self.bot is None:
            logger.warning(
                "Admin chat id is not configured; cannot send admin message"
            )
            return False
        try:
            await self.bot.send_message(chat_id=chat_id, text=message)
        except Exception as exc:
            logger.error(
                "Failed to send admin message: %s", exc, exc_info=True
            )
            return False
        return True
