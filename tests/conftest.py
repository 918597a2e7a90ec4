# tests/conftest.py

"""Shared pytest fixtures for all price_watcher tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from price_watcher.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_paths(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Keep log files and the default database out of the repo."""
    monkeypatch.setattr(Settings, "LOGS_DIR", tmp_path / "logs")
    monkeypatch.setattr(
        Settings, "PRICE_DB_PATH", tmp_path / "data" / "test.db"
    )
    yield
