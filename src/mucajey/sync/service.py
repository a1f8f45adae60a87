"""Catalog sync service. Refreshes the card and edition caches from the server."""

import asyncio
import dataclasses
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import httpx

from mucajey.cache.store import CatalogCacheStore
from mucajey.catalog.client import CatalogClient
from mucajey.catalog.decoder import decode_card_list, decode_edition_list
from mucajey.catalog.exceptions import CatalogError
from mucajey.catalog.models import CardData, EditionData
from mucajey.db.base import utc_now
from mucajey.db.enums import SyncResource
from mucajey.sync.errors import classify_error
from mucajey.sync.state import ResourceSyncState, SyncPhase, ensure_utc

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")

SyncListener = Callable[[SyncResource, ResourceSyncState], None]


class CatalogSyncService:
    """Coordinates fetch, decode and cache replacement per resource.

    Cards and editions are tracked independently: both may sync at the same
    time, but a second sync of the same resource while one is in flight is a
    no-op. Failures never escape; they are classified, persisted to the
    resource's sync status and kept in the state snapshot for display. The
    cache is only replaced after the payload was fetched and decoded, so a
    failed sync leaves the previous data in place.
    """

    def __init__(self, client: CatalogClient, store: CatalogCacheStore) -> None:
        self._client = client
        self._store = store
        self._states: dict[SyncResource, ResourceSyncState] = {
            resource: ResourceSyncState() for resource in SyncResource
        }
        self._listeners: list[SyncListener] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def get_state(self, resource: SyncResource) -> ResourceSyncState:
        return self._states[resource]

    def subscribe(self, listener: SyncListener) -> Callable[[], None]:
        """Register a state-change listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set_state(self, resource: SyncResource, **changes: object) -> ResourceSyncState:
        state = dataclasses.replace(self._states[resource], **changes)  # type: ignore[arg-type]
        self._states[resource] = state
        for listener in list(self._listeners):
            try:
                listener(resource, state)
            except Exception:
                logger.exception("Sync state listener failed for %s", resource.value)
        return state

    async def load(self) -> None:
        """Restore cached-data flags and the last persisted sync outcome."""
        for resource, has_data in (
            (SyncResource.CARDS, await self._store.has_cards()),
            (SyncResource.EDITIONS, await self._store.has_editions()),
        ):
            status = await self._store.load_sync_status(resource)
            self._set_state(
                resource,
                has_data=has_data,
                last_sync=ensure_utc(status.last_sync),
                error=status.error_message,
            )

    # ------------------------------------------------------------------
    # Sync
    # ------------------------------------------------------------------

    async def sync_cards(self) -> ResourceSyncState:
        return await self._sync(SyncResource.CARDS, self._fetch_cards, self._store.replace_all_cards)

    async def sync_editions(self) -> ResourceSyncState:
        return await self._sync(SyncResource.EDITIONS, self._fetch_editions, self._store.replace_all_editions)

    async def sync_all(self) -> dict[SyncResource, ResourceSyncState]:
        """Sync cards and editions concurrently."""
        cards, editions = await asyncio.gather(self.sync_cards(), self.sync_editions())
        return {SyncResource.CARDS: cards, SyncResource.EDITIONS: editions}

    async def _fetch_cards(self) -> list[CardData]:
        cards = decode_card_list(await self._client.get_all_cards())
        logger.info("Received %d cards", len(cards))
        if cards:
            first = cards[0]
            logger.debug(
                "First card: id=%s, title=%s, artist=%s, year=%s",
                first.card_id,
                first.title,
                first.artist,
                first.year,
            )
        else:
            logger.warning("Card response contained no cards")
        return cards

    async def _fetch_editions(self) -> list[EditionData]:
        editions = decode_edition_list(await self._client.get_all_editions())
        logger.info("Received %d editions", len(editions))
        if editions:
            first = editions[0]
            logger.debug("First edition: %s (%s) - %d cards", first.edition, first.file, first.card_count)
        return editions

    async def _sync(
        self,
        resource: SyncResource,
        fetch: Callable[[], Awaitable[list[ItemT]]],
        replace: Callable[[Sequence[ItemT]], Awaitable[int]],
    ) -> ResourceSyncState:
        # Check-and-set happens before the first await, so it cannot race.
        if self._states[resource].is_syncing:
            logger.info("%s sync already in progress, skipping", resource.value)
            return self._states[resource]
        self._set_state(resource, phase=SyncPhase.SYNCING, error=None)

        logger.info("Starting %s sync", resource.value, extra={"resource": resource})
        try:
            items = await fetch()
            await replace(items)
            status = await self._store.update_sync_status(resource, success=True)
        except Exception as exc:
            message = classify_error(exc)
            if isinstance(exc, (CatalogError, httpx.TransportError)):
                logger.error("%s sync failed: %s", resource.value, exc, extra={"resource": resource})
            else:
                logger.exception("%s sync failed", resource.value, extra={"resource": resource})
            await self._record_failure(resource, message)
            return self._set_state(resource, phase=SyncPhase.IDLE, error=message)

        logger.info("%s sync completed: %d items", resource.value, len(items), extra={"resource": resource})
        return self._set_state(
            resource,
            phase=SyncPhase.IDLE,
            error=None,
            has_data=True,
            last_sync=ensure_utc(status.last_sync) or utc_now(),
        )

    async def _record_failure(self, resource: SyncResource, message: str) -> None:
        try:
            await self._store.update_sync_status(resource, success=False, error=message)
        except Exception:
            logger.exception("Could not persist %s sync failure", resource.value)
