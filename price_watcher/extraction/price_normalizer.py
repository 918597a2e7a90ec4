# price_watcher/extraction/price_normalizer.py

"""Turn locale-ambiguous price text into an exact ``Decimal``.

Shop pages mix ``.`` and ``,`` freely: ``36.499,00 TL`` (Turkish),
``1,299.99`` (English), ``36499,00`` and ``36499.00`` all occur.  The
rules applied by :func:`canonicalize`:

* spaces and non-breaking spaces are removed;
* when both separators are present the right-most one is the decimal
  point and every occurrence of the other is a thousands separator;
* a lone ``,`` is a decimal comma;
* a lone ``.`` is already a decimal point and is left alone;
* currency symbols and codes around the number are trimmed.

If the canonical string is not a plain decimal literal the original text
is re-read once with the Turkish convention (``.`` thousands, ``,``
decimal) before giving up with :class:`UnparsablePriceError`.
"""

import re
from decimal import Decimal, InvalidOperation

_SPACES: tuple[str, ...] = (" ", "\u00a0", "\u202f")

# Plain unsigned decimal literal, no exponent, no NaN/Infinity
_CANONICAL_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")

# Currency symbols / codes hugging the number on either side
_EDGE_RE = re.compile(r"^[^\d.]+|[^\d]+$")


class UnparsablePriceError(ValueError):
    """Raised when price text does not resolve to a number."""

    def __init__(self, text: str | None) -> None:
        super().__init__(f"Unparsable price text: {text!r}")
        self.text = text


def _compact(raw: str) -> str:
    """Remove ordinary and non-breaking spaces."""
    value = raw
    for space in _SPACES:
        value = value.replace(space, "")
    return value


def canonicalize(raw: str) -> str:
    """Rewrite *raw* into dot-decimal form without thousands separators."""
    value = _compact(raw)
    has_dot = "." in value
    has_comma = "," in value

    if has_dot and has_comma:
        if value.rfind(",") > value.rfind("."):
            value = value.replace(".", "").replace(",", ".")
        else:
            value = value.replace(",", "")
    elif has_comma:
        value = value.replace(",", ".")

    return _EDGE_RE.sub("", value)


def _regional(raw: str) -> str:
    """Read *raw* with ``.`` as thousands and ``,`` as decimal separator."""
    value = _compact(raw).replace(".", "").replace(",", ".")
    return _EDGE_RE.sub("", value)


def _parse_decimal(text: str) -> Decimal | None:
    if not _CANONICAL_RE.fullmatch(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def normalize(raw: str | None) -> Decimal:
    """Parse price text such as ``'36.499,00 TL'`` into a Decimal.

    Raises:
        UnparsablePriceError: no digits, or neither the canonical nor the
            regional reading is a valid number.
    """
    if not raw or not any(ch.isdigit() for ch in raw):
        raise UnparsablePriceError(raw)

    price = _parse_decimal(canonicalize(raw))
    if price is None:
        price = _parse_decimal(_regional(raw))
    if price is None:
        raise UnparsablePriceError(raw)
    return price


def try_normalize(raw: str | None) -> Decimal | None:
    """Like :func:`normalize` but returns ``None`` instead of raising."""
    try:
        return normalize(raw)
    except UnparsablePriceError:
        return None
