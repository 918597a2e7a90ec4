# price_watcher/extraction/price_extractor.py

"""Locate the most plausible price text in an arbitrary product page."""

import logging
import re
from collections.abc import Callable
from decimal import Decimal

from bs4 import BeautifulSoup, Tag

from price_watcher.extraction.price_normalizer import try_normalize

logger = logging.getLogger("price_watcher.extractor")

PreferredExtraction = Callable[[BeautifulSoup], str | None]

# "price": "1.299,99" / "price": 1299.99 inside JSON-LD blocks
_JSON_LD_PRICE_RE = re.compile(
    r'"price"\s*:\s*"?([\d.,\s]+)"?', re.IGNORECASE
)

# At least one digit group shaped like a price
_PRICE_RE = re.compile(r"\d{1,3}(?:[.,]\d{3})*(?:[.,]\d{2})?")

PRICE_HINTS: tuple[str, ...] = (
    "price",
    "amount",
    "value",
    "fiyat",
    "prc",
    "amt",
)

_HINT_TAGS: list[str] = ["span", "div", "ins", "meta"]
_HINT_ATTRS: tuple[str, ...] = ("class", "id", "data-testid")

_META_PRICE_SELECTOR = (
    "meta[itemprop='price'], "
    "meta[property='product:price:amount'], "
    "meta[property='og:price:amount']"
)


def has_price_hint(value: str | None) -> bool:
    """Return True if an attribute value looks price related."""
    if not value or not value.strip():
        return False
    lower = value.lower()
    return any(hint in lower for hint in PRICE_HINTS)


def _attr_text(tag: Tag, name: str) -> str:
    """Attribute value as a string (``class`` comes back as a list)."""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(str(v) for v in value)
    return str(value)


class PriceTextExtractor:
    """Find raw price text using a fixed fallback order.

    1. JSON-LD structured data.
    2. The caller's site-specific preferred extraction, if any.
    3. Price-hinted ``span``/``div``/``ins``/``meta`` elements; the
       candidate with the largest numeric value wins.
    4. Product price ``meta`` tags.

    The "largest value wins" rule in step 3 is a heuristic: a page that
    shows an unrelated larger number in a hinted element (a shipping
    badge, an instalment total) will return that number.
    """

    def extract(
        self,
        soup: BeautifulSoup,
        preferred: PreferredExtraction | None = None,
    ) -> str | None:
        """Return the raw price text, or None when nothing was found."""
        text = self.from_structured_data(soup)
        if text:
            logger.debug("Price text from JSON-LD: %r", text)
            return text

        if preferred is not None:
            text = preferred(soup)
            if text and text.strip():
                logger.debug("Price text from site override: %r", text)
                return text.strip()

        text = self.from_hinted_elements(soup)
        if text:
            logger.debug("Price text from DOM heuristic: %r", text)
            return text

        text = self.from_meta_tags(soup)
        if text:
            logger.debug("Price text from meta tag: %r", text)
        return text

    @staticmethod
    def from_structured_data(soup: BeautifulSoup) -> str | None:
        """Scan every JSON-LD script for a ``price`` field."""
        scripts = soup.find_all(
            "script", attrs={"type": "application/ld+json"}
        )
        for script in scripts:
            match = _JSON_LD_PRICE_RE.search(script.get_text())
            if not match:
                continue
            value = match.group(1).strip("\"' \t\r\n,")
            if value:
                return value
        return None

    @staticmethod
    def from_hinted_elements(soup: BeautifulSoup) -> str | None:
        """Pick the largest numeric candidate among price-hinted elements."""
        best_price: Decimal | None = None
        best_text: str | None = None
        first_text: str | None = None

        for tag in soup.find_all(_HINT_TAGS):
            if not any(
                has_price_hint(_attr_text(tag, attr))
                for attr in _HINT_ATTRS
            ):
                continue

            if tag.name == "meta":
                candidate = _attr_text(tag, "content").strip()
            else:
                candidate = tag.get_text().strip()

            if not candidate or not _PRICE_RE.search(candidate):
                continue

            price = try_normalize(candidate)
            if price is None:
                if first_text is None:
                    first_text = candidate
                continue
            if best_price is None or price > best_price:
                best_price = price
                best_text = candidate

        return best_text if best_text is not None else first_text

    @staticmethod
    def from_meta_tags(soup: BeautifulSoup) -> str | None:
        """Read ``content`` from product price meta tags."""
        for tag in soup.select(_META_PRICE_SELECTOR):
            content = _attr_text(tag, "content").strip()
            if content:
                return content
        return None
