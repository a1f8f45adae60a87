"""Resolve scanned card codes against the local cache."""

import logging

from mucajey.cache.store import CatalogCacheStore
from mucajey.catalog.client import CatalogClient
from mucajey.catalog.decoder import decode_mapping_response
from mucajey.db.models.catalog import Card
from mucajey.lookup.exceptions import CardNotFoundError, MappingMissingDataError
from mucajey.lookup.scan import parse_scan

logger = logging.getLogger(__name__)


class LookupResolver:
    """Turns a scanned QR payload into a playable cached card.

    Cards without Apple Music data trigger the server-side mapping call; the
    result is written back to that single card. Any failure propagates and
    leaves the cache as it was.
    """

    def __init__(self, store: CatalogCacheStore, client: CatalogClient) -> None:
        self._store = store
        self._client = client

    async def resolve(self, scanned_payload: str) -> Card:
        """Resolve a scanned payload to a card with Apple Music data.

        Raises:
            InvalidScanFormatError: If the payload cannot be parsed.
            CardNotFoundError: If no cached card matches.
            MappingMissingDataError: If the mapping response lacks an id/uri pair.
            CatalogError: If the mapping request fails.
        """
        key = parse_scan(scanned_payload)
        logger.info(
            "Scanned edition=%s card=%s language=%s",
            key.edition,
            key.card_id,
            key.language,
            extra={"edition": key.edition, "card_id": key.card_id},
        )

        card = await self._store.get_card(key.edition, key.card_id)
        if card is None:
            raise CardNotFoundError(key.edition, key.card_id)

        if card.has_apple_mapping:
            return card

        return await self._map(card)

    async def _map(self, card: Card) -> Card:
        logger.info(
            "Requesting Apple Music mapping for %s/%s",
            card.edition,
            card.card_id,
            extra={"edition": card.edition, "card_id": card.card_id},
        )
        mapping = decode_mapping_response(await self._client.map_card_to_track(card.edition, card.card_id))

        apple = mapping.apple_mapping()
        if apple is None:
            logger.warning(
                "Mapping for %s/%s returned no Apple Music data: %s", card.edition, card.card_id, mapping.message
            )
            raise MappingMissingDataError(card.edition, card.card_id)

        apple_id, apple_uri = apple
        updated = await self._store.update_card_mapping(card.edition, card.card_id, apple_id, apple_uri)
        if updated is None:
            # Replaced by a concurrent sync while the mapping call was in flight.
            raise CardNotFoundError(card.edition, card.card_id)
        return updated
