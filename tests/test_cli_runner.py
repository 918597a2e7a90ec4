# tests/test_cli_runner.py

"""Tests for the one-shot CLI commands."""

import unittest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

from price_watcher.cli.runner import fetch_single, list_sites, run_once
from price_watcher.config.settings import Settings


def _router(price: Decimal | None) -> MagicMock:
    router = MagicMock()
    router.fetch_price = AsyncMock(return_value=price)
    router.close = AsyncMock()
    return router


def _settings(urls: list[str]) -> Settings:
    settings = Settings()
    settings.PRODUCT_URLS = urls
    settings.TELEGRAM_BOT_TOKEN = ""
    return settings


class TestListSites(unittest.TestCase):
    """--sites output."""

    @patch("price_watcher.cli.runner.Console")
    def test_lists_each_site(self, mock_console: MagicMock) -> None:
        """One line per supported site."""
        self.assertEqual(list_sites(), 0)
        printed = " ".join(
            str(c.args[0]) for c in mock_console.return_value.print.call_args_list
        )
        for domain in ("trendyol.com", "hepsiburada.com", "amazon.com.tr"):
            self.assertIn(domain, printed)


class TestFetchSingle(unittest.IsolatedAsyncioTestCase):
    """--fetch URL."""

    @patch("price_watcher.cli.runner.Console")
    @patch("price_watcher.cli.runner.SiteRouter.default")
    async def test_price_found(
        self, mock_default: MagicMock, mock_console: MagicMock,
    ) -> None:
        """A found price is printed in Turkish format and exits 0."""
        router = _router(Decimal("1299.00"))
        mock_default.return_value = router

        code = await fetch_single("https://www.trendyol.com/p-1")

        self.assertEqual(code, 0)
        router.close.assert_awaited_once()
        printed = mock_console.return_value.print.call_args.args[0]
        self.assertIn("1.299,00 TL", printed)

    @patch("price_watcher.cli.runner._err")
    @patch("price_watcher.cli.runner.SiteRouter.default")
    async def test_price_missing(
        self, mock_default: MagicMock, mock_err: MagicMock,
    ) -> None:
        """No price exits 1."""
        router = _router(None)
        mock_default.return_value = router

        code = await fetch_single("https://shop.example.org/p")

        self.assertEqual(code, 1)
        router.close.assert_awaited_once()
        mock_err.print.assert_called_once()


class TestRunOnce(unittest.IsolatedAsyncioTestCase):
    """--once runs a single persisted cycle."""

    @patch("price_watcher.cli.runner.Console")
    @patch("price_watcher.cli.runner.SiteRouter.default")
    async def test_cycle_persists_and_prints(
        self, mock_default: MagicMock, mock_console: MagicMock,
    ) -> None:
        """Checked prices are stored and rendered as a table."""
        mock_default.return_value = _router(Decimal("75.00"))
        url = "https://www.amazon.com.tr/dp/B1"

        code = await run_once(_settings([url]))

        self.assertEqual(code, 0)
        mock_console.return_value.print.assert_called_once()

        from price_watcher.storage.price_storage import PriceStorage

        storage = PriceStorage()
        try:
            history = await storage.get_last_price(url)
        finally:
            storage.close()
        assert history is not None
        self.assertEqual(history.last_price, Decimal("75.00"))

    @patch("price_watcher.cli.runner._err")
    @patch("price_watcher.cli.runner.SiteRouter.default")
    async def test_nothing_checked(
        self, mock_default: MagicMock, mock_err: MagicMock,
    ) -> None:
        """A cycle without any price exits 1."""
        router = _router(None)
        mock_default.return_value = router

        code = await run_once(_settings(["https://www.trendyol.com/p-1"]))

        self.assertEqual(code, 1)
        router.close.assert_awaited_once()
        mock_err.print.assert_called_once()
