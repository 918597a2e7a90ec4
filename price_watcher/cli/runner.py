# price_watcher/cli/runner.py

"""Service bootstrap and one-shot CLI commands."""

import asyncio
import logging

from aiogram import Bot, Dispatcher
from rich.console import Console
from rich.table import Table

from price_watcher.config.settings import Settings
from price_watcher.fetchers.site_router import SiteRouter
from price_watcher.models.price_check_result import PriceCheckResult
from price_watcher.notifications.command_handler import (
    TelegramCommandHandler,
)
from price_watcher.notifications.telegram_notifier import (
    TelegramNotifier,
    format_price,
)
from price_watcher.services.price_watcher import PriceWatcher
from price_watcher.storage.price_storage import PriceStorage

logger = logging.getLogger("price_watcher.cli")

# Stderr console for status messages so stdout stays clean for tables
_err = Console(stderr=True)


def _print_results(results: list[PriceCheckResult]) -> None:
    """Render a Rich table of check results to stdout."""
    table = Table(
        title="Price Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("URL", overflow="fold", style="dim")
    table.add_column("Old", justify="right")
    table.add_column("New", justify="right", style="green")
    table.add_column("Change", justify="right")
    table.add_column("Changed", justify="center")

    for r in results:
        old = format_price(r.old_price) if r.old_price is not None else "-"
        change_style = (
            "red" if r.change_rate_percent > 0
            else "green" if r.change_rate_percent < 0
            else "dim"
        )
        table.add_row(
            r.product_url,
            old,
            format_price(r.new_price),
            f"[{change_style}]{r.change_rate_display}[/{change_style}]",
            "yes" if r.changed else "no",
        )

    Console().print(table)


def list_sites() -> int:
    """Print the supported sites and their domains."""
    router = SiteRouter.default()
    for fetcher in router.fetchers:
        Console().print(
            f"[magenta]{fetcher.source_name}[/magenta]: "
            f"{', '.join(fetcher.DOMAINS)}"
        )
    return 0


async def fetch_single(url: str) -> int:
    """Fetch and print the current price of one URL.

    Returns exit code 0 on success, 1 when no price was found.
    """
    router = SiteRouter.default()
    try:
        price = await router.fetch_price(url)
    finally:
        await router.close()

    if price is None:
        _err.print(f"[red]No price found for {url}[/red]")
        return 1
    Console().print(f"{url}\n[green]{format_price(price)}[/green]")
    return 0


async def run_once(settings: Settings | None = None) -> int:
    """Run a single watch cycle (persisting and notifying) and print it.

    Returns exit code 0 when at least one price was checked.
    """
    settings = settings or Settings()
    storage = PriceStorage()
    router = SiteRouter.default()
    bot = (
        Bot(token=settings.TELEGRAM_BOT_TOKEN)
        if settings.TELEGRAM_BOT_TOKEN
        else None
    )
    notifier = TelegramNotifier(
        bot, storage, settings.TELEGRAM_ADMIN_CHAT_ID
    )
    watcher = PriceWatcher(router, storage, notifier, settings)
    try:
        results = await watcher.check_prices()
    finally:
        await router.close()
        if bot is not None:
            await bot.session.close()
        storage.close()

    if not results:
        _err.print("[yellow]No prices could be checked.[/yellow]")
        return 1
    _print_results(results)
    return 0


async def run_service(settings: Settings | None = None) -> int:
    """Run the watch loop and the Telegram poller until cancelled."""
    settings = settings or Settings()
    storage = PriceStorage()
    router = SiteRouter.default()

    bot: Bot | None = None
    if settings.TELEGRAM_BOT_TOKEN:
        bot = Bot(token=settings.TELEGRAM_BOT_TOKEN)
    else:
        logger.warning(
            "TELEGRAM_BOT_TOKEN not set; notifications are disabled"
        )

    notifier = TelegramNotifier(
        bot, storage, settings.TELEGRAM_ADMIN_CHAT_ID
    )
    watcher = PriceWatcher(router, storage, notifier, settings)

    tasks: list[asyncio.Task[None]] = [
        asyncio.create_task(watcher.run(), name="price-watcher")
    ]
    if bot is not None:
        dispatcher = Dispatcher()
        TelegramCommandHandler(storage, settings).register(dispatcher)
        tasks.append(
            asyncio.create_task(
                dispatcher.start_polling(bot, handle_signals=False),
                name="telegram-poller",
            )
        )
        await notifier.notify_admin("Price watcher started.")

    try:
        await asyncio.gather(*tasks)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        await router.close()
        if bot is not None:
            await bot.session.close()
        storage.close()
        logger.info("price_watcher service stopped")
    return 0
