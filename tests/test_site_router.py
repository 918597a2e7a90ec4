# tests/test_site_router.py

"""Tests for URL-to-fetcher routing."""

import unittest
from decimal import Decimal
from unittest.mock import AsyncMock

from price_watcher.fetchers.amazon_fetcher import AmazonFetcher
from price_watcher.fetchers.hepsiburada_fetcher import HepsiburadaFetcher
from price_watcher.fetchers.site_router import SiteRouter
from price_watcher.fetchers.trendyol_fetcher import TrendyolFetcher


class TestSiteRouter(unittest.IsolatedAsyncioTestCase):
    """SiteRouter selection and delegation."""

    def test_default_registration_order(self) -> None:
        """default() registers Trendyol, Hepsiburada, Amazon."""
        router = SiteRouter.default()
        self.assertEqual(
            [type(f) for f in router.fetchers],
            [TrendyolFetcher, HepsiburadaFetcher, AmazonFetcher],
        )

    def test_fetcher_for(self) -> None:
        """Each supported URL maps to its own fetcher."""
        router = SiteRouter.default()
        cases = {
            "https://www.trendyol.com/x-p-1": TrendyolFetcher,
            "https://www.hepsiburada.com/x-p-HB1": HepsiburadaFetcher,
            "https://www.amazon.com.tr/dp/B1": AmazonFetcher,
        }
        for url, expected in cases.items():
            with self.subTest(url=url):
                self.assertIsInstance(router.fetcher_for(url), expected)

    async def test_unknown_site_returns_none(self) -> None:
        """A URL no fetcher handles logs a skip and yields None."""
        router = SiteRouter.default()
        for fetcher in router.fetchers:
            fetcher.fetch_price = AsyncMock()  # type: ignore[method-assign]

        with self.assertLogs("price_watcher.router", level="WARNING") as cm:
            price = await router.fetch_price("https://shop.example.org/p/1")

        self.assertIsNone(price)
        self.assertIn("No price fetcher available", cm.output[0])
        for fetcher in router.fetchers:
            fetcher.fetch_price.assert_not_awaited()

    async def test_delegates_to_first_match(self) -> None:
        """The first fetcher accepting the URL wins."""
        first = AmazonFetcher()
        second = AmazonFetcher()
        first.fetch_price = AsyncMock(  # type: ignore[method-assign]
            return_value=Decimal("10.00")
        )
        second.fetch_price = AsyncMock(  # type: ignore[method-assign]
            return_value=Decimal("20.00")
        )
        router = SiteRouter([first, second])

        price = await router.fetch_price("https://www.amazon.com/dp/B1")

        self.assertEqual(price, Decimal("10.00"))
        first.fetch_price.assert_awaited_once_with(
            "https://www.amazon.com/dp/B1"
        )
        second.fetch_price.assert_not_awaited()

    async def test_close_closes_every_fetcher(self) -> None:
        """close() is forwarded to every registered fetcher."""
        router = SiteRouter.default()
        for fetcher in router.fetchers:
            fetcher.close = AsyncMock()  # type: ignore[method-assign]
        await router.close()
        for fetcher in router.fetchers:
            fetcher.close.assert_awaited_once()
