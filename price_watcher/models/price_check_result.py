# price_watcher/models/price_check_result.py

"""Outcome of a single price check for one URL."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


def compute_change_rate(
    old_price: Decimal | None, new_price: Decimal,
) -> float:
    """Signed percentage change from *old_price* to *new_price*.

    Returns 0 when there is no prior price or the prior price is zero.
    """
    if old_price is None or old_price == 0:
        return 0.0
    return float((new_price - old_price) / old_price * 100)


@dataclass(frozen=True)
class PriceCheckResult:
    """Transient result built once per URL per watch cycle."""

    product_url: str
    old_price: Decimal | None
    new_price: Decimal
    changed: bool
    change_rate_percent: float
    checked_at: datetime

    @classmethod
    def from_prices(
        cls,
        product_url: str,
        old_price: Decimal | None,
        new_price: Decimal,
        checked_at: datetime,
    ) -> "PriceCheckResult":
        """Build a result, deriving ``changed`` and the change rate."""
        return cls(
            product_url=product_url,
            old_price=old_price,
            new_price=new_price,
            changed=old_price is None or old_price != new_price,
            change_rate_percent=compute_change_rate(
                old_price, new_price
            ),
            checked_at=checked_at,
        )

    @property
    def change_rate_display(self) -> str:
        """Change rate with sign and two decimals, e.g. ``+10.00%``."""
        sign = "+" if self.change_rate_percent >= 0 else ""
        return f"{sign}{self.change_rate_percent:.2f}%"
