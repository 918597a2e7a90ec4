# tests/test_price_normalizer.py

"""Tests for locale-ambiguous price text normalization."""

import unittest
from decimal import Decimal

from price_watcher.extraction.price_normalizer import (
    UnparsablePriceError,
    canonicalize,
    normalize,
    try_normalize,
)


class TestCanonicalize(unittest.TestCase):
    """Separator rules applied before parsing."""

    def test_mixed_separators_comma_last(self) -> None:
        """Turkish style: dots are thousands, comma is decimal."""
        self.assertEqual(canonicalize("36.499,00"), "36499.00")

    def test_mixed_separators_dot_last(self) -> None:
        """English style: commas are thousands, dot is decimal."""
        self.assertEqual(canonicalize("1,299.99"), "1299.99")

    def test_comma_only_is_decimal(self) -> None:
        """A lone comma is a decimal comma."""
        self.assertEqual(canonicalize("36499,00"), "36499.00")

    def test_dot_only_untouched(self) -> None:
        """A lone dot is already a decimal point."""
        self.assertEqual(canonicalize("36499.00"), "36499.00")

    def test_strips_currency_and_spaces(self) -> None:
        """Currency symbols and spaces around the number are removed."""
        self.assertEqual(canonicalize("₺ 1.299,99 TL"), "1299.99")


class TestNormalize(unittest.TestCase):
    """normalize() returns exact decimals or raises."""

    def test_equivalent_readings(self) -> None:
        """All three spellings resolve to the same value."""
        for text in ("36.499,00", "36499,00", "36499.00"):
            with self.subTest(text=text):
                self.assertEqual(normalize(text), Decimal("36499.00"))

    def test_currency_suffix(self) -> None:
        """'1.299,99 TL' parses to 1299.99."""
        self.assertEqual(normalize("1.299,99 TL"), Decimal("1299.99"))

    def test_non_breaking_space_thousands(self) -> None:
        """Non-breaking spaces used as digit grouping are ignored."""
        self.assertEqual(
            normalize("1\u00a0299,99\u00a0TL"), Decimal("1299.99")
        )

    def test_plain_integer(self) -> None:
        """Integers without separators parse as-is."""
        self.assertEqual(normalize("1299"), Decimal("1299"))

    def test_single_dot_is_decimal(self) -> None:
        """'1.299' is read as one point two nine nine."""
        self.assertEqual(normalize("1.299"), Decimal("1.299"))

    def test_regional_fallback(self) -> None:
        """Several dots fall back to the Turkish thousands reading."""
        self.assertEqual(normalize("1.299.000"), Decimal("1299000"))

    def test_exact_arithmetic(self) -> None:
        """Parsed values are exact decimals, not floats."""
        total = normalize("0,10") + normalize("0,20")
        self.assertEqual(total, Decimal("0.30"))
        self.assertIsInstance(total, Decimal)

    def test_no_digits_raises(self) -> None:
        """Text without digits is unparsable."""
        with self.assertRaises(UnparsablePriceError) as ctx:
            normalize("Tükendi")
        self.assertEqual(ctx.exception.text, "Tükendi")

    def test_empty_and_none_raise(self) -> None:
        """Empty or missing text is unparsable."""
        for text in ("", None):
            with self.subTest(text=text):
                with self.assertRaises(UnparsablePriceError):
                    normalize(text)

    def test_garbled_number_raises(self) -> None:
        """Digits that form no single number are unparsable."""
        with self.assertRaises(UnparsablePriceError):
            normalize("1.2.3,4,5")

    def test_exponent_rejected(self) -> None:
        """Scientific notation is not a price."""
        with self.assertRaises(UnparsablePriceError):
            normalize("1e5")

    def test_is_value_error(self) -> None:
        """UnparsablePriceError can be handled as a ValueError."""
        self.assertTrue(issubclass(UnparsablePriceError, ValueError))


class TestTryNormalize(unittest.TestCase):
    """try_normalize() swallows only parse failures."""

    def test_returns_none_on_failure(self) -> None:
        """Unparsable text yields None."""
        self.assertIsNone(try_normalize("garbage"))

    def test_returns_value_on_success(self) -> None:
        """Valid text yields its decimal."""
        self.assertEqual(try_normalize("25,00"), Decimal("25.00"))
