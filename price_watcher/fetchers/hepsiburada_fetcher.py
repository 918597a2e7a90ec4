# price_watcher/fetchers/hepsiburada_fetcher.py

"""Price fetcher for hepsiburada.com product pages."""

from price_watcher.fetchers.base_fetcher import BaseSiteFetcher


class HepsiburadaFetcher(BaseSiteFetcher):
    """Price fetcher for hepsiburada.com.

    Hepsiburada answers 403 to requests that do not look like an
    in-site navigation, hence the extra Referer and Sec-Fetch headers.
    """

    DOMAINS = ("hepsiburada.com",)

    def __init__(self) -> None:
        super().__init__("hepsiburada")

    def build_headers(self, url: str) -> dict[str, str]:
        """Add the navigation headers Hepsiburada expects."""
        return {
            **super().build_headers(url),
            "Accept-Language": "tr-TR,tr;q=0.9",
            "Referer": "https://www.hepsiburada.com/",
            "Cache-Control": "max-age=0",
            "Sec-Fetch-Dest": "document",
            "Sec-Fetch-Mode": "navigate",
            "Sec-Fetch-Site": "same-origin",
        }
