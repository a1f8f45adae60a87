"""Tests for CatalogCacheStore."""

import asyncio
from collections.abc import Callable

import pytest
from sqlalchemy.exc import IntegrityError

from mucajey.cache.store import CatalogCacheStore
from mucajey.catalog.models import CardData, EditionData
from mucajey.db.enums import SyncResource

CardFactory = Callable[..., CardData]
EditionFactory = Callable[..., EditionData]


class TestCards:
    async def test_empty_cache(self, store: CatalogCacheStore) -> None:
        assert not await store.has_cards()
        assert await store.get_all_cards() == []

    async def test_replace_stores_exact_set(self, store: CatalogCacheStore, make_card: CardFactory) -> None:
        await store.replace_all_cards([make_card("1"), make_card("2"), make_card("3")])
        count = await store.replace_all_cards([make_card("4"), make_card("5")])

        assert count == 2
        assert await store.has_cards()
        assert sorted(card.card_id for card in await store.get_all_cards()) == ["4", "5"]

    async def test_replace_with_empty_list_clears(self, store: CatalogCacheStore, make_card: CardFactory) -> None:
        await store.replace_all_cards([make_card("1")])
        await store.replace_all_cards([])
        assert not await store.has_cards()

    async def test_failed_replace_keeps_previous_rows(
        self, store: CatalogCacheStore, make_card: CardFactory
    ) -> None:
        await store.replace_all_cards([make_card("1"), make_card("2")])
        unstorable = CardData.model_construct(card_id=None, title="T", artist="A", year="2000")

        with pytest.raises(IntegrityError):
            await store.replace_all_cards([make_card("9"), unstorable])

        assert sorted(card.card_id for card in await store.get_all_cards()) == ["1", "2"]

    async def test_duplicate_keys_keep_last(self, store: CatalogCacheStore, make_card: CardFactory) -> None:
        count = await store.replace_all_cards(
            [
                make_card("1", title="first"),
                make_card("1", "hitster-nl"),
                make_card("1", title="second"),
            ]
        )

        assert count == 2
        card = await store.get_card("hitster-de", "1")
        assert card is not None
        assert card.title == "second"
        assert await store.get_card("hitster-nl", "1") is not None

    async def test_same_card_id_in_two_editions(self, store: CatalogCacheStore, make_card: CardFactory) -> None:
        await store.replace_all_cards(
            [
                make_card("00073", "hitster-de", title="German"),
                make_card("00073", "hitster-de-aaaa0007", title="Guilty"),
            ]
        )
        base = await store.get_card("hitster-de", "00073")
        special = await store.get_card("hitster-de-aaaa0007", "00073")
        assert base is not None and base.title == "German"
        assert special is not None and special.title == "Guilty"
        assert await store.get_card("hitster-nl", "00073") is None

    async def test_all_cards_ordered_by_year(self, store: CatalogCacheStore, make_card: CardFactory) -> None:
        await store.replace_all_cards(
            [make_card("1", year="1999"), make_card("2", year="1965"), make_card("3", year="1980")]
        )
        assert [card.year for card in await store.get_all_cards()] == ["1965", "1980", "1999"]

    async def test_cards_for_edition(self, store: CatalogCacheStore, make_card: CardFactory) -> None:
        await store.replace_all_cards(
            [make_card("2", "hitster-de"), make_card("1", "hitster-de"), make_card("1", "hitster-nl")]
        )
        cards = await store.get_cards_for_edition("hitster-de")
        assert [(card.edition, card.card_id) for card in cards] == [("hitster-de", "1"), ("hitster-de", "2")]

    async def test_stored_fields_and_timestamp(self, store: CatalogCacheStore, make_card: CardFactory) -> None:
        await store.replace_all_cards([make_card("1", spotify_uri="spotify:track:x", language_long="English")])
        card = await store.get_card("hitster-de", "1")
        assert card is not None
        assert card.spotify_uri == "spotify:track:x"
        assert card.language_long == "English"
        assert card.last_updated is not None
        assert not card.has_apple_mapping


class TestUpdateCardMapping:
    async def test_updates_only_target_card(self, store: CatalogCacheStore, make_card: CardFactory) -> None:
        await store.replace_all_cards([make_card("1"), make_card("1", "hitster-nl"), make_card("2")])

        updated = await store.update_card_mapping("hitster-de", "1", "apple-1", "apple:track:1")

        assert updated is not None
        assert updated.has_apple_mapping
        stored = await store.get_card("hitster-de", "1")
        assert stored is not None
        assert (stored.apple_id, stored.apple_uri) == ("apple-1", "apple:track:1")
        for edition, card_id in (("hitster-nl", "1"), ("hitster-de", "2")):
            other = await store.get_card(edition, card_id)
            assert other is not None
            assert other.apple_id == ""

    async def test_missing_card_returns_none(self, store: CatalogCacheStore) -> None:
        assert await store.update_card_mapping("hitster-de", "404", "a", "b") is None

    async def test_serialized_with_bulk_replace(self, store: CatalogCacheStore, make_card: CardFactory) -> None:
        await store.replace_all_cards([make_card("1")])
        replace = asyncio.create_task(store.replace_all_cards([make_card("1"), make_card("2")]))
        updated = await store.update_card_mapping("hitster-de", "1", "a", "b")
        await replace

        # The mapping committed first; the queued replace then overwrote it.
        assert updated is not None
        card = await store.get_card("hitster-de", "1")
        assert card is not None
        assert card.apple_id == ""
        assert len(await store.get_all_cards()) == 2


class TestEditions:
    async def test_replace_and_read(self, store: CatalogCacheStore, make_edition: EditionFactory) -> None:
        await store.replace_all_editions([make_edition("hitster-de"), make_edition("hitster-nl", language_short="nl")])
        await store.replace_all_editions([make_edition("hitster-fr", language_short="fr")])
        assert [edition.edition for edition in await store.get_all_editions()] == ["hitster-fr"]
        assert await store.has_editions()

    async def test_duplicate_codes_keep_last(self, store: CatalogCacheStore, make_edition: EditionFactory) -> None:
        count = await store.replace_all_editions(
            [make_edition("hitster-de", edition_name="Old"), make_edition("hitster-de", edition_name="New")]
        )
        assert count == 1
        assert await store.edition_display_name("hitster-de") == "New"

    async def test_base_editions_listed_first(self, store: CatalogCacheStore, make_edition: EditionFactory) -> None:
        await store.replace_all_editions(
            [make_edition("hitster-de-aaaa0007", identifier="aaaa0007"), make_edition("hitster-de")]
        )
        assert [edition.edition for edition in await store.get_all_editions()] == [
            "hitster-de",
            "hitster-de-aaaa0007",
        ]

    async def test_base_edition(self, store: CatalogCacheStore, make_edition: EditionFactory) -> None:
        await store.replace_all_editions(
            [
                make_edition("hitster-de-aaaa0007", identifier="aaaa0007", edition_name="Guilty Pleasures"),
                make_edition("hitster-de", edition_name="Hitster Deutschland"),
            ]
        )
        base = await store.get_base_edition("de")
        assert base is not None
        assert base.edition == "hitster-de"
        assert await store.get_base_edition("nl") is None

    async def test_display_name(self, store: CatalogCacheStore, make_edition: EditionFactory) -> None:
        await store.replace_all_editions(
            [
                make_edition("hitster-de-aaaa0007", identifier="aaaa0007", edition_name="Guilty Pleasures"),
                make_edition("hitster-de", edition_name="Hitster Deutschland"),
            ]
        )
        assert await store.edition_display_name("hitster-de-aaaa0007") == "Guilty Pleasures"
        assert await store.edition_display_name("hitster-de") == "Hitster Deutschland"
        assert await store.edition_display_name("hitster-de-zzzz", language_short="de") == "Hitster Deutschland"
        assert await store.edition_display_name("hitster-xx") == "hitster-xx"


class TestSyncStatus:
    async def test_created_on_first_access(self, store: CatalogCacheStore) -> None:
        status = await store.load_sync_status(SyncResource.CARDS)
        assert status.is_first_sync
        assert status.last_sync is None
        assert status.error_message is None

    async def test_success_then_failure(self, store: CatalogCacheStore) -> None:
        ok = await store.update_sync_status(SyncResource.CARDS, success=True)
        assert ok.last_sync is not None
        assert not ok.is_first_sync

        failed = await store.update_sync_status(SyncResource.CARDS, success=False, error="Network down")
        assert failed.error_message == "Network down"
        reloaded = await store.load_sync_status(SyncResource.CARDS)
        assert reloaded.last_sync is not None
        assert reloaded.error_message == "Network down"

    async def test_success_clears_error(self, store: CatalogCacheStore) -> None:
        await store.update_sync_status(SyncResource.EDITIONS, success=False, error="boom")
        await store.update_sync_status(SyncResource.EDITIONS, success=True)
        status = await store.load_sync_status(SyncResource.EDITIONS)
        assert status.error_message is None

    async def test_failure_on_first_sync_leaves_last_sync_empty(self, store: CatalogCacheStore) -> None:
        status = await store.update_sync_status(SyncResource.EDITIONS, success=False, error="boom")
        assert status.last_sync is None
        assert not status.is_first_sync

    async def test_resources_tracked_independently(self, store: CatalogCacheStore) -> None:
        await store.update_sync_status(SyncResource.CARDS, success=False, error="cards failed")
        editions = await store.load_sync_status(SyncResource.EDITIONS)
        assert editions.error_message is None
        assert editions.is_first_sync
