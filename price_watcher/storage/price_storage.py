# price_watcher/storage/price_storage.py

"""SQLite-backed store for last known prices and Telegram subscribers."""

import asyncio
import logging
import sqlite3
import threading
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import TypeVar

from price_watcher.config.settings import Settings
from price_watcher.models.price_history import ProductPriceHistory
from price_watcher.models.subscriber import Subscriber

logger = logging.getLogger("price_watcher.storage")

_T = TypeVar("_T")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS product_price_history (
    id              TEXT PRIMARY KEY,
    product_url     TEXT NOT NULL UNIQUE,
    last_price      TEXT NOT NULL,
    last_check_time TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS subscribers (
    id         TEXT    PRIMARY KEY,
    chat_id    INTEGER NOT NULL UNIQUE,
    is_active  INTEGER NOT NULL DEFAULT 1,
    created_at TEXT    NOT NULL
);
"""


def _row_to_history(row: tuple[str, str, str, str]) -> ProductPriceHistory:
    return ProductPriceHistory(
        id=row[0],
        product_url=row[1],
        last_price=Decimal(row[2]),
        last_check_time=datetime.fromisoformat(row[3]),
    )


def _row_to_subscriber(row: tuple[str, int, int, str]) -> Subscriber:
    return Subscriber(
        id=row[0],
        chat_id=row[1],
        is_active=bool(row[2]),
        created_at=datetime.fromisoformat(row[3]),
    )


class PriceStorage:
    """Store shared by the watch loop and the Telegram command handler.

    Every public method is a coroutine that runs its SQLite work in a
    worker thread while holding one lock, so each logical operation
    (including read-then-write ones such as
    :meth:`add_or_activate_subscriber`) is serialized.
    """

    def __init__(
        self, db_path: Path | None = None,
    ) -> None:
        path = db_path or Settings.PRICE_DB_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(
            str(path), check_same_thread=False,
        )
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)
        logger.debug("PriceStorage opened at %s", path)

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            self._conn.close()

    async def _run(self, func: Callable[..., _T], *args: object) -> _T:
        """Run *func* under the storage lock in a worker thread."""

        def locked() -> _T:
            with self._lock:
                return func(*args)

        return await asyncio.to_thread(locked)

    # ── Price history ────────────────────────────────────

    def _get_last_price(
        self, product_url: str,
    ) -> ProductPriceHistory | None:
        row = self._conn.execute(
            "SELECT id, product_url, last_price, last_check_time "
            "FROM product_price_history WHERE product_url = ?",
            (product_url,),
        ).fetchone()
        return _row_to_history(row) if row else None

    def _upsert_price(self, history: ProductPriceHistory) -> None:
        self._conn.execute(
            "INSERT INTO product_price_history "
            "(id, product_url, last_price, last_check_time) "
            "VALUES (?, ?, ?, ?) "
            "ON CONFLICT(product_url) DO UPDATE SET "
            "last_price=excluded.last_price, "
            "last_check_time=excluded.last_check_time",
            (
                history.id,
                history.product_url,
                str(history.last_price),
                history.last_check_time.isoformat(),
            ),
        )
        self._conn.commit()

    def _count_watched_products(self) -> int:
        row = self._conn.execute(
            "SELECT COUNT(*) FROM product_price_history"
        ).fetchone()
        return int(row[0])

    async def get_last_price(
        self, product_url: str,
    ) -> ProductPriceHistory | None:
        """Return the stored history for *product_url*, if any."""
        return await self._run(self._get_last_price, product_url)

    async def upsert_price(self, history: ProductPriceHistory) -> None:
        """Insert or update the record keyed by ``history.product_url``."""
        await self._run(self._upsert_price, history)
        logger.debug(
            "Stored %s for %s", history.last_price, history.product_url
        )

    async def count_watched_products(self) -> int:
        """Number of product URLs with a stored price."""
        return await self._run(self._count_watched_products)

    # ── Subscribers ──────────────────────────────────────

    def _find_subscriber(self, chat_id: int) -> Subscriber | None:
        row = self._conn.execute(
            "SELECT id, chat_id, is_active, created_at "
            "FROM subscribers WHERE chat_id = ?",
            (chat_id,),
        ).fetchone()
        return _row_to_subscriber(row) if row else None

    def _list_active_subscribers(self) -> list[Subscriber]:
        rows = self._conn.execute(
            "SELECT id, chat_id, is_active, created_at "
            "FROM subscribers WHERE is_active = 1 "
            "ORDER BY rowid",
        ).fetchall()
        return [_row_to_subscriber(r) for r in rows]

    def _add_or_activate_subscriber(self, chat_id: int) -> Subscriber:
        existing = self._find_subscriber(chat_id)
        if existing is None:
            subscriber = Subscriber(
                chat_id=chat_id,
                is_active=True,
                created_at=datetime.now(timezone.utc),
                id=str(uuid.uuid4()),
            )
            self._conn.execute(
                "INSERT INTO subscribers "
                "(id, chat_id, is_active, created_at) "
                "VALUES (?, ?, 1, ?)",
                (
                    subscriber.id,
                    subscriber.chat_id,
                    subscriber.created_at.isoformat(),
                ),
            )
            self._conn.commit()
            return subscriber

        if not existing.is_active:
            self._conn.execute(
                "UPDATE subscribers SET is_active = 1 WHERE id = ?",
                (existing.id,),
            )
            self._conn.commit()
            existing.is_active = True
        return existing

    def _deactivate_subscriber(self, chat_id: int) -> bool:
        cur = self._conn.execute(
            "UPDATE subscribers SET is_active = 0 WHERE chat_id = ?",
            (chat_id,),
        )
        self._conn.commit()
        return cur.rowcount > 0

    async def list_active_subscribers(self) -> list[Subscriber]:
        """Active subscribers, oldest first."""
        return await self._run(self._list_active_subscribers)

    async def get_subscriber(self, chat_id: int) -> Subscriber | None:
        """Return the subscriber for *chat_id*, active or not."""
        return await self._run(self._find_subscriber, chat_id)

    async def add_or_activate_subscriber(self, chat_id: int) -> Subscriber:
        """Create the subscriber or re-activate an existing one."""
        subscriber = await self._run(
            self._add_or_activate_subscriber, chat_id
        )
        logger.info("Chat %d subscribed", chat_id)
        return subscriber

    async def deactivate_subscriber(self, chat_id: int) -> bool:
        """Deactivate *chat_id*; False when it never subscribed."""
        return await self._run(self._deactivate_subscriber, chat_id)
