# price_watcher/fetchers/base_fetcher.py

"""Base class shared by every site price fetcher."""

import json
import logging
from decimal import Decimal
from typing import Any
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from curl_cffi import requests as curl_requests

from price_watcher.config.settings import Settings
from price_watcher.extraction.price_extractor import PriceTextExtractor
from price_watcher.extraction.price_normalizer import (
    UnparsablePriceError,
    normalize,
)


class BaseSiteFetcher:
    """Shared fetch, extract and normalize pipeline for one site.

    Subclasses declare ``DOMAINS`` and may extend :meth:`build_headers`.
    Preferred price selectors come from ``selectors.json`` under the
    fetcher's ``source_name``.
    """

    DOMAINS: tuple[str, ...] = ()

    def __init__(self, source_name: str) -> None:
        self.source_name = source_name
        self.logger = logging.getLogger(
            f"price_watcher.{source_name}"
        )
        self.settings = Settings()
        self.selectors: dict[str, list[str]] = self._load_selectors()
        self.extractor = PriceTextExtractor()
        self.session: curl_requests.AsyncSession | None = None
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def _load_selectors(self) -> dict[str, list[str]]:
        """Load CSS selectors for this site from selectors.json."""
        with open(self.settings.SELECTORS_PATH, encoding="utf-8") as f:
            all_selectors: dict[str, Any] = json.load(f)
        result: dict[str, list[str]] = all_selectors.get(
            self.source_name, {}
        )
        return result

    def can_handle(self, url: str) -> bool:
        """Return True if *url*'s host belongs to one of ``DOMAINS``."""
        try:
            host = (urlparse(url).hostname or "").lower()
        except ValueError:
            return False
        if not host:
            return False
        return any(
            host == domain or host.endswith(f".{domain}")
            for domain in self.DOMAINS
        )

    def build_headers(self, url: str) -> dict[str, str]:
        """Browser-like request headers for *url*."""
        return {
            **self.settings.DEFAULT_HEADERS,
            "User-Agent": self.settings.USER_AGENT,
        }

    def preferred_price_text(self, soup: BeautifulSoup) -> str | None:
        """Try this site's known live-price selectors in order."""
        for selector in self.selectors.get("preferred_price", []):
            node = soup.select_one(selector)
            if node is None:
                continue
            text = node.get_text().strip()
            if text:
                return text
        return None

    def _get_session(self) -> curl_requests.AsyncSession:
        if self.session is None:
            self.session = curl_requests.AsyncSession(
                impersonate=self.settings.IMPERSONATE_BROWSER
            )
        return self.session

    async def _get_page(self, url: str) -> BeautifulSoup | None:
        """GET *url* and parse it; None on transport or HTTP failure."""
        session = self._get_session()
        try:
            resp = await session.get(
                url,
                headers=self.build_headers(url),
                timeout=self._request_timeout,
            )
        except Exception as exc:
            self.logger.error(
                "[%s] Request error for %s: %s",
                self.source_name,
                url,
                exc,
                exc_info=True,
            )
            return None

        if not 200 <= resp.status_code < 300:
            self.logger.warning(
                "[%s] Failed to fetch price for %s, HTTP %d",
                self.source_name,
                url,
                resp.status_code,
            )
            return None
        return BeautifulSoup(resp.text, "lxml")

    async def fetch_price(self, url: str) -> Decimal | None:
        """Fetch *url* and return its current price, or None.

        Only ``asyncio.CancelledError`` escapes; every other failure is
        logged and reported as "no price".
        """
        soup = await self._get_page(url)
        if soup is None:
            return None

        try:
            price_text = self.extractor.extract(
                soup, preferred=self.preferred_price_text
            )
        except Exception as exc:
            self.logger.error(
                "[%s] Extraction failed for %s: %s",
                self.source_name,
                url,
                exc,
                exc_info=True,
            )
            return None

        if not price_text:
            self.logger.warning(
                "[%s] Price element could not be found for %s",
                self.source_name,
                url,
            )
            return None

        try:
            price = normalize(price_text)
        except UnparsablePriceError:
            self.logger.warning(
                "[%s] Price text could not be parsed for %s: %r",
                self.source_name,
                url,
                price_text,
            )
            return None

        self.logger.info(
            "[%s] Price for %s: %s", self.source_name, url, price
        )
        return price

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.session is not None:
            await self.session.close()
            self.session = None
