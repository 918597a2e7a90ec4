# price_watcher/models/price_history.py

"""Last known price state for a watched product URL."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass
class ProductPriceHistory:
    """The most recent price observed for one product URL.

    One record exists per ``product_url``; it is mutated in place on
    every successful check and never deleted by the watch loop.
    """

    product_url: str
    last_price: Decimal
    last_check_time: datetime
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
