# price_watcher/fetchers/site_router.py

"""Route a product URL to the fetcher for its site."""

import logging
from decimal import Decimal

from price_watcher.fetchers.amazon_fetcher import AmazonFetcher
from price_watcher.fetchers.base_fetcher import BaseSiteFetcher
from price_watcher.fetchers.hepsiburada_fetcher import HepsiburadaFetcher
from price_watcher.fetchers.trendyol_fetcher import TrendyolFetcher

logger = logging.getLogger("price_watcher.router")


class SiteRouter:
    """Delegates to the first registered fetcher that accepts a URL."""

    def __init__(self, fetchers: list[BaseSiteFetcher]) -> None:
        self.fetchers = list(fetchers)

    @classmethod
    def default(cls) -> "SiteRouter":
        """Router over every supported site, in matching order."""
        return cls([TrendyolFetcher(), HepsiburadaFetcher(), AmazonFetcher()])

    def fetcher_for(self, url: str) -> BaseSiteFetcher | None:
        """Return the first fetcher whose ``can_handle`` accepts *url*."""
        for fetcher in self.fetchers:
            if fetcher.can_handle(url):
                return fetcher
        return None

    async def fetch_price(self, url: str) -> Decimal | None:
        """Fetch *url*'s price through its site fetcher.

        An unsupported URL is a configuration gap: it is logged and
        reported as "no price" so the rest of the cycle carries on.
        """
        fetcher = self.fetcher_for(url)
        if fetcher is None:
            logger.warning("No price fetcher available for %s", url)
            return None

        logger.info(
            "Using %s for %s", type(fetcher).__name__, url
        )
        return await fetcher.fetch_price(url)

    async def close(self) -> None:
        """Close every fetcher's HTTP session."""
        for fetcher in self.fetchers:
            await fetcher.close()
