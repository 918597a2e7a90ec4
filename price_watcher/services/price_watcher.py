# price_watcher/services/price_watcher.py

"""Timer-driven loop turning fetched prices into change notifications."""

import asyncio
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Protocol

from price_watcher.config.settings import Settings
from price_watcher.models.price_check_result import PriceCheckResult
from price_watcher.models.price_history import ProductPriceHistory
from price_watcher.storage.price_storage import PriceStorage

logger = logging.getLogger("price_watcher.watcher")


class PriceSource(Protocol):
    """Anything that can resolve a product URL to its current price."""

    async def fetch_price(self, url: str) -> Decimal | None: ...


class ChangeNotifier(Protocol):
    """Receives check results that crossed the notification rule."""

    async def notify_price_change(self, result: PriceCheckResult) -> int: ...


class PriceWatcher:
    """Checks every configured URL once per cycle, forever.

    Per URL: fetch, load last price, compare, decide, persist, notify.
    Persistence always happens before dispatch and is not undone when
    dispatch fails.
    """

    def __init__(
        self,
        source: PriceSource,
        storage: PriceStorage,
        notifier: ChangeNotifier,
        settings: Settings | None = None,
    ) -> None:
        self.source = source
        self.storage = storage
        self.notifier = notifier
        self.settings = settings or Settings()

    def should_notify(
        self,
        result: PriceCheckResult,
        existing: ProductPriceHistory | None,
    ) -> bool:
        """Apply the notify-on-every-pull flag and the change threshold.

        A first observation only records a baseline.
        """
        if self.settings.NOTIFY_ON_EVERY_PULL:
            return True
        if existing is None:
            return False
        return (
            abs(result.change_rate_percent)
            >= self.settings.MIN_CHANGE_PERCENT
        )

    async def check_url(self, url: str) -> PriceCheckResult | None:
        """Run one fetch-compare-persist-notify pass for *url*."""
        price = await self.source.fetch_price(url)
        if price is None:
            logger.info("No price for %s this cycle, skipping", url)
            return None

        existing = await self.storage.get_last_price(url)
        result = PriceCheckResult.from_prices(
            product_url=url,
            old_price=existing.last_price if existing else None,
            new_price=price,
            checked_at=datetime.now(timezone.utc),
        )
        notify = self.should_notify(result, existing)

        history = existing or ProductPriceHistory(
            product_url=url,
            last_price=result.new_price,
            last_check_time=result.checked_at,
        )
        history.last_price = result.new_price
        history.last_check_time = result.checked_at
        await self.storage.upsert_price(history)

        if notify:
            await self.notifier.notify_price_change(result)
            logger.info(
                "Notification sent for %s with change %s",
                url,
                result.change_rate_display,
            )
        else:
            logger.info(
                "Price checked for %s with change %s",
                url,
                result.change_rate_display,
            )
        return result

    async def check_prices(self) -> list[PriceCheckResult]:
        """Check every configured URL in order, isolating failures."""
        urls = [
            u.strip()
            for u in self.settings.PRODUCT_URLS
            if u and u.strip()
        ]
        if not urls:
            logger.info("No product URLs configured.")
            return []

        results: list[PriceCheckResult] = []
        for url in urls:
            try:
                result = await self.check_url(url)
            except Exception as exc:
                logger.error(
                    "Price check failed for %s: %s",
                    url,
                    exc,
                    exc_info=True,
                )
                continue
            if result is not None:
                results.append(result)
        return results

    async def run(self) -> None:
        """Cycle until cancelled.

        Cancellation is how the service shuts down; it is logged at info
        level and re-raised to the caller.
        """
        interval = self.settings.check_interval_seconds
        logger.info(
            "Price watcher started, interval %.0f seconds", interval
        )
        try:
            while True:
                results = await self.check_prices()
                logger.info(
                    "Cycle finished: %d prices checked", len(results)
                )
                await asyncio.sleep(interval)
        except asyncio.CancelledError:
            logger.info("Price watcher stopped")
            raise
