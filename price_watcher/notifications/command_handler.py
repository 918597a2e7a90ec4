# price_watcher/notifications/command_handler.py

"""Telegram chat commands: /start, /stop, /status."""

import logging

from aiogram import Dispatcher
from aiogram.types import Message

from price_watcher.config.settings import Settings
from price_watcher.storage.price_storage import PriceStorage

logger = logging.getLogger("price_watcher.commands")

HELP_TEXT = "Supported commands: /start, /stop, /status"


class TelegramCommandHandler:
    """Maps chat commands onto subscriber operations."""

    def __init__(
        self,
        storage: PriceStorage,
        settings: Settings | None = None,
    ) -> None:
        self.storage = storage
        self.settings = settings or Settings()

    def register(self, dispatcher: Dispatcher) -> None:
        """Attach the message handler to an aiogram dispatcher."""
        dispatcher.message.register(self.on_message)

    async def handle_command(self, chat_id: int, text: str) -> str:
        """Apply one command for *chat_id* and return the reply text."""
        command = text.strip().lower()

        if command == "/start":
            await self.storage.add_or_activate_subscriber(chat_id)
            return "You are now subscribed to price updates."

        if command == "/stop":
            deactivated = await self.storage.deactivate_subscriber(chat_id)
            logger.info("Chat %d deactivated: %s", chat_id, deactivated)
            if deactivated:
                return "Your subscription has been stopped."
            return "You are not subscribed."

        if command == "/status":
            subscriber = await self.storage.get_subscriber(chat_id)
            watched = await self.storage.count_watched_products()
            state = (
                "Active subscription"
                if subscriber is not None and subscriber.is_active
                else "Not subscribed"
            )
            return (
                f"Status: {state}\n"
                f"Watched products: {watched}\n"
                f"Check interval: {self.settings.CHECK_INTERVAL_MINUTES} minutes"
            )

        return HELP_TEXT

    async def on_message(self, message: Message) -> None:
        """aiogram entry point for incoming text messages."""
        if not message.text or not message.text.strip():
            return

        chat_id = message.chat.id
        logger.info("Received %r from chat %d", message.text, chat_id)
        try:
            reply = await self.handle_command(chat_id, message.text)
        except Exception as exc:
            logger.error(
                "Command handling failed for chat %d: %s",
                chat_id,
                exc,
                exc_info=True,
            )
            return
        await message.answer(reply)
