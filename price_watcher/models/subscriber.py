# price_watcher/models/subscriber.py

"""Telegram chat subscribed to price notifications."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Subscriber:
    """A chat that receives price change notifications."""

    chat_id: int
    is_active: bool = True
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
