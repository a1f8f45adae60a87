"""Application wiring for the sync stack."""

import logging
from dataclasses import dataclass
from typing import Self

from mucajey.cache.store import CatalogCacheStore
from mucajey.catalog.client import CatalogClient
from mucajey.config.database import DatabaseSettings
from mucajey.config.settings import SyncSettings
from mucajey.credentials import CredentialProvisioner
from mucajey.db.session import DatabaseManager
from mucajey.logging.setup import configure_logging
from mucajey.lookup.resolver import LookupResolver
from mucajey.sync.service import CatalogSyncService

logger = logging.getLogger(__name__)


@dataclass
class CatalogApp:
    """All sync-layer components sharing one database.

    Usage:
        app = CatalogApp.from_settings(SyncSettings(), DatabaseSettings())
        await app.start()
        await app.sync.sync_all()
        card = await app.resolver.resolve("hitstergame.com/de/00073")
        await app.aclose()
    """

    settings: SyncSettings
    db: DatabaseManager
    provisioner: CredentialProvisioner
    client: CatalogClient
    store: CatalogCacheStore
    sync: CatalogSyncService
    resolver: LookupResolver

    @classmethod
    def from_settings(cls, settings: SyncSettings, db_settings: DatabaseSettings) -> Self:
        db = DatabaseManager(db_settings)
        provisioner = CredentialProvisioner(settings, db)
        client = CatalogClient(
            provisioner,
            base_url=settings.API_BASE_URL,
            request_timeout=settings.REQUEST_TIMEOUT_SECONDS,
        )
        store = CatalogCacheStore(db)
        return cls(
            settings=settings,
            db=db,
            provisioner=provisioner,
            client=client,
            store=store,
            sync=CatalogSyncService(client, store),
            resolver=LookupResolver(store, client),
        )

    async def start(self) -> None:
        """Set up JSON logging, then create missing tables and restore the persisted sync state."""
        configure_logging(self.settings.LOG_LEVEL)
        await self.db.create_all()
        await self.sync.load()
        logger.info("Catalog cache ready")

    async def aclose(self) -> None:
        await self.db.dispose()
