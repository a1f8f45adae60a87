"""Local catalog cache: the read model behind every catalog screen.

Writes to a collection are serialized by a per-collection ``asyncio.Lock``
and each operation runs in its own transaction, so readers only ever see
committed snapshots. Bulk replacement is delete-all then insert-all inside a
single transaction: if anything fails the previous rows survive untouched.
"""

import asyncio
import logging
from collections.abc import Callable, Hashable, Sequence
from typing import TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from mucajey.catalog.models import CardData, EditionData
from mucajey.db.base import utc_now
from mucajey.db.enums import SyncResource
from mucajey.db.models.catalog import Card, Edition
from mucajey.db.models.operations import SyncStatusRecord
from mucajey.db.session import DatabaseManager

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")


def _last_per_key(items: Sequence[ItemT], key: Callable[[ItemT], Hashable], label: str) -> list[ItemT]:
    unique = {key(item): item for item in items}
    dropped = len(items) - len(unique)
    if dropped:
        logger.warning("Dropped %d duplicate %s entries (last occurrence kept)", dropped, label)
    return list(unique.values())


class CatalogCacheStore:
    """Persistent storage for cards, editions and their sync status."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db
        self._write_locks: dict[SyncResource, asyncio.Lock] = {
            SyncResource.CARDS: asyncio.Lock(),
            SyncResource.EDITIONS: asyncio.Lock(),
        }

    # ------------------------------------------------------------------
    # Bulk replacement
    # ------------------------------------------------------------------

    async def replace_all_cards(self, cards: Sequence[CardData]) -> int:
        """Atomically replace every cached card. Returns the number stored.

        Cards sharing an ``(edition, card_id)`` key collapse to the last one.
        """
        cards = _last_per_key(cards, lambda card: (card.edition, card.card_id), "card")
        now = utc_now()
        async with self._write_locks[SyncResource.CARDS]:
            async with self._db.session() as session:
                await session.execute(delete(Card))
                session.add_all(Card(**card.model_dump(), last_updated=now) for card in cards)
        logger.info("Replaced card cache with %d cards", len(cards))
        return len(cards)

    async def replace_all_editions(self, editions: Sequence[EditionData]) -> int:
        """Atomically replace every cached edition. Returns the number stored.

        Editions sharing a code collapse to the last one.
        """
        editions = _last_per_key(editions, lambda edition: edition.edition, "edition")
        now = utc_now()
        async with self._write_locks[SyncResource.EDITIONS]:
            async with self._db.session() as session:
                await session.execute(delete(Edition))
                session.add_all(Edition(**edition.model_dump(), last_updated=now) for edition in editions)
        logger.info("Replaced edition cache with %d editions", len(editions))
        return len(editions)

    # ------------------------------------------------------------------
    # Single-record update
    # ------------------------------------------------------------------

    async def update_card_mapping(self, edition: str, card_id: str, apple_id: str, apple_uri: str) -> Card | None:
        """Store Apple Music mapping fields on one card.

        Goes through the card write lock so it can never interleave with a
        bulk replace. Returns the updated card, or None if it no longer exists.
        """
        async with self._write_locks[SyncResource.CARDS]:
            async with self._db.session() as session:
                card = await self._find_card(edition, card_id, session)
                if card is None:
                    return None
                card.apple_id = apple_id
                card.apple_uri = apple_uri
                card.last_updated = utc_now()
        logger.info("Stored Apple Music mapping for card %s/%s", edition, card_id)
        return card

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def has_cards(self) -> bool:
        async with self._db.session() as session:
            return await session.scalar(select(Card.id).limit(1)) is not None

    async def has_editions(self) -> bool:
        async with self._db.session() as session:
            return await session.scalar(select(Edition.id).limit(1)) is not None

    async def get_card(self, edition: str, card_id: str) -> Card | None:
        """Look up a card by its composite ``(edition, card_id)`` key."""
        async with self._db.session() as session:
            return await self._find_card(edition, card_id, session)

    async def get_all_cards(self) -> list[Card]:
        """Return all cards ordered by year."""
        async with self._db.session() as session:
            result = await session.execute(select(Card).order_by(Card.year, Card.edition, Card.card_id))
            return list(result.scalars().all())

    async def get_cards_for_edition(self, edition: str) -> list[Card]:
        """Return the cards of one edition ordered by card id."""
        async with self._db.session() as session:
            result = await session.execute(select(Card).where(Card.edition == edition).order_by(Card.card_id))
            return list(result.scalars().all())

    async def get_all_editions(self) -> list[Edition]:
        """Return all editions ordered by identifier (base editions first)."""
        async with self._db.session() as session:
            result = await session.execute(select(Edition).order_by(Edition.identifier, Edition.edition))
            return list(result.scalars().all())

    async def get_edition(self, edition: str) -> Edition | None:
        async with self._db.session() as session:
            result = await session.execute(select(Edition).where(Edition.edition == edition))
            return result.scalar_one_or_none()

    async def get_base_edition(self, language_short: str) -> Edition | None:
        """Return the edition of a language whose identifier is empty."""
        async with self._db.session() as session:
            result = await session.execute(
                select(Edition)
                .where(Edition.language_short == language_short, Edition.identifier == "")
                .order_by(Edition.edition)
                .limit(1)
            )
            return result.scalar_one_or_none()

    async def edition_display_name(self, edition: str, language_short: str | None = None) -> str:
        """Resolve a display name for an edition code.

        Exact code match first, then the base edition of ``language_short``,
        then the code itself.
        """
        match = await self.get_edition(edition)
        if match is not None:
            return match.edition_name or match.edition
        if language_short:
            base = await self.get_base_edition(language_short)
            if base is not None:
                return base.edition_name or base.edition
        return edition

    # ------------------------------------------------------------------
    # Sync status
    # ------------------------------------------------------------------

    async def load_sync_status(self, resource: SyncResource) -> SyncStatusRecord:
        """Return the status record for a resource, creating it on first access."""
        async with self._db.session() as session:
            return await self._get_or_create_status(resource, session)

    async def update_sync_status(
        self,
        resource: SyncResource,
        *,
        success: bool,
        error: str | None = None,
    ) -> SyncStatusRecord:
        """Record the outcome of a sync attempt.

        ``last_sync`` only moves on success; ``error_message`` is always
        overwritten and ``is_first_sync`` always cleared.
        """
        async with self._db.session() as session:
            status = await self._get_or_create_status(resource, session)
            if success:
                status.last_sync = utc_now()
            status.is_first_sync = False
            status.error_message = None if success else error
        return status

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    async def _find_card(edition: str, card_id: str, session: AsyncSession) -> Card | None:
        result = await session.execute(select(Card).where(Card.edition == edition, Card.card_id == card_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def _get_or_create_status(resource: SyncResource, session: AsyncSession) -> SyncStatusRecord:
        result = await session.execute(select(SyncStatusRecord).where(SyncStatusRecord.resource == resource))
        status = result.scalar_one_or_none()
        if status is None:
            status = SyncStatusRecord(resource=resource, last_sync=None, is_first_sync=True, error_message=None)
            session.add(status)
            await session.flush()
        return status
