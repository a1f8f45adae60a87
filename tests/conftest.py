"""Shared test configuration and fixtures."""

import logging
from collections.abc import AsyncGenerator, Callable, Iterator
from pathlib import Path

import pytest
from cryptography.fernet import Fernet

from mucajey.cache.store import CatalogCacheStore
from mucajey.catalog.models import CardData, EditionData
from mucajey.config.database import DatabaseSettings
from mucajey.config.settings import SyncSettings
from mucajey.db.session import DatabaseManager

TEST_BASE_URL = "https://catalog.test"


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def fernet_key() -> str:
    return Fernet.generate_key().decode()


@pytest.fixture
def settings(fernet_key: str) -> SyncSettings:
    return SyncSettings(
        API_BASE_URL=TEST_BASE_URL,
        APP_NAME="mucajey-tests",
        APP_VERSION="1.2.3",
        CLIENT_PLATFORM="python",
        DEVICE_VENDOR_ID="",
        CREDENTIAL_ENCRYPTION_KEY=fernet_key,
    )


@pytest.fixture
async def db(tmp_path: Path) -> AsyncGenerator[DatabaseManager]:
    manager = DatabaseManager(DatabaseSettings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'cache.db'}"))
    await manager.create_all()
    yield manager
    await manager.dispose()


@pytest.fixture
def store(db: DatabaseManager) -> CatalogCacheStore:
    return CatalogCacheStore(db)


@pytest.fixture
def make_card() -> Callable[..., CardData]:
    def _make(card_id: str = "00001", edition: str = "hitster-de", **overrides: str) -> CardData:
        fields: dict[str, str] = {
            "card_id": card_id,
            "edition": edition,
            "title": f"Song {card_id}",
            "artist": f"Artist {card_id}",
            "year": "1984",
        }
        fields.update(overrides)
        return CardData(**fields)

    return _make


@pytest.fixture
def make_edition() -> Callable[..., EditionData]:
    def _make(edition: str = "hitster-de", identifier: str = "", **overrides: object) -> EditionData:
        fields: dict[str, object] = {
            "edition": edition,
            "edition_name": edition.replace("-", " ").title(),
            "identifier": identifier,
            "file": f"{edition}.csv",
            "card_count": 300,
        }
        fields.update(overrides)
        return EditionData(**fields)  # type: ignore[arg-type]

    return _make
