# price_watcher/fetchers/amazon_fetcher.py

"""Price fetcher for Amazon Turkey (and amazon.com) product pages."""

from price_watcher.fetchers.base_fetcher import BaseSiteFetcher


class AmazonFetcher(BaseSiteFetcher):
    """Price fetcher for amazon.com.tr and amazon.com."""

    DOMAINS = ("amazon.com.tr", "amazon.com")

    def __init__(self) -> None:
        super().__init__("amazon")

    def build_headers(self, url: str) -> dict[str, str]:
        """Add top-level navigation headers."""
        return {
            **super().build_headers(url),
            "Upgrade-Insecure-Requests": "1",
            "Sec-Fetch-Dest": "document",
            "Sec-Fetch-Mode": "navigate",
            "Sec-Fetch-Site": "none",
        }
