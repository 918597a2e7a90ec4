# price_watcher/fetchers/trendyol_fetcher.py

"""Price fetcher for trendyol.com product pages."""

from price_watcher.fetchers.base_fetcher import BaseSiteFetcher


class TrendyolFetcher(BaseSiteFetcher):
    """Price fetcher for trendyol.com.

    Trendyol renders the discounted price in a ``prc-dsc`` span next to
    the struck-through original; that span is preferred over the
    generic heuristic.
    """

    DOMAINS = ("trendyol.com",)

    def __init__(self) -> None:
        super().__init__("trendyol")
