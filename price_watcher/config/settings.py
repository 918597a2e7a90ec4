# price_watcher/config/settings.py

"""Central configuration for the price_watcher service."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


def _env_list(name: str) -> list[str]:
    """Split a comma or newline separated environment variable."""
    raw = os.getenv(name, "")
    parts = raw.replace("\n", ",").split(",")
    return [p.strip() for p in parts if p.strip()]


def _env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag such as ``true``/``1``/``yes``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Central configuration for the price_watcher service."""

    # --- Watching ---
    PRODUCT_URLS: list[str] = _env_list("PRODUCT_URLS")
    CHECK_INTERVAL_MINUTES: int = int(
        os.getenv("CHECK_INTERVAL_MINUTES", "5")
    )
    NOTIFY_ON_EVERY_PULL: bool = _env_bool("NOTIFY_ON_EVERY_PULL")
    MIN_CHANGE_PERCENT: float = float(
        os.getenv("MIN_CHANGE_PERCENT", "0.1")
    )

    # --- Telegram ---
    TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
    TELEGRAM_ADMIN_CHAT_ID: str = os.getenv(
        "TELEGRAM_ADMIN_CHAT_ID", ""
    )
    CURRENCY_LABEL: str = "TL"

    # --- Scraping ---
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "20"))

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome120"
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": (
            "text/html,application/xhtml+xml,"
            "application/xml;q=0.9,image/avif,"
            "image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "tr-TR,tr;q=0.9,en-US;q=0.8,en;q=0.7",
        "Cache-Control": "no-cache",
    }

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING")

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    SELECTORS_PATH: Path = (
        Path(__file__).resolve().parent / "selectors.json"
    )
    PRICE_DB_PATH: Path = Path(
        os.getenv(
            "PRICE_DB_PATH",
            str(BASE_DIR / "data" / "price_watcher.db"),
        )
    )
    LOGS_DIR: Path = BASE_DIR / "logs"

    @property
    def check_interval_seconds(self) -> float:
        """Inter-cycle sleep, never shorter than one minute."""
        return max(1, self.CHECK_INTERVAL_MINUTES) * 60.0
