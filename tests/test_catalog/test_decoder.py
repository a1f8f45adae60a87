"""Tests for catalog response decoding."""

import json

import pytest

from mucajey.catalog.constants import BODY_SNIPPET_MAX_CHARS
from mucajey.catalog.decoder import (
    decode_card_list,
    decode_edition_list,
    decode_mapping_response,
    decode_registration_response,
)
from mucajey.catalog.exceptions import CatalogDecodingError, body_snippet


def _cards(*cards: dict[str, object]) -> bytes:
    return json.dumps({"cards": list(cards)}).encode()


class TestDecodeCardList:
    def test_full_card(self) -> None:
        data = _cards(
            {
                "id": "00073",
                "title": "Take On Me",
                "artist": "a-ha",
                "year": "1985",
                "edition": "hitster-de-aaaa0007",
                "language_short": "en",
                "language_long": "English",
                "apple": {"id": "123", "uri": "apple:track:123"},
                "spotify": {"id": "sp1", "uri": "spotify:track:sp1", "url": "https://open.spotify.com/track/sp1"},
            }
        )
        [card] = decode_card_list(data)
        assert card.card_id == "00073"
        assert card.edition == "hitster-de-aaaa0007"
        assert card.language_short == "en"
        assert card.apple_id == "123"
        assert card.apple_uri == "apple:track:123"
        assert card.spotify_url == "https://open.spotify.com/track/sp1"

    def test_defaults_applied(self) -> None:
        [card] = decode_card_list(_cards({"id": "1", "title": "T", "artist": "A", "year": "2000"}))
        assert card.edition == "Unknown"
        assert card.language_short == "de"
        assert card.language_long == "Deutsch"
        assert card.apple_id == ""
        assert card.spotify_uri == ""

    def test_null_optionals_treated_as_absent(self) -> None:
        data = _cards({"id": "1", "title": "T", "artist": "A", "year": "2000", "apple": None, "language_short": None})
        [card] = decode_card_list(data)
        assert card.apple_id == ""
        assert card.language_short == "de"

    def test_extra_fields_ignored(self) -> None:
        data = _cards({"id": "1", "title": "T", "artist": "A", "year": "2000", "source_file": "x.csv", "foo": 1})
        assert len(decode_card_list(data)) == 1

    def test_empty_list(self) -> None:
        assert decode_card_list(b'{"cards": []}') == []

    def test_missing_required_field(self) -> None:
        with pytest.raises(CatalogDecodingError) as exc_info:
            decode_card_list(_cards({"title": "T", "artist": "A", "year": "2000"}))
        assert "cards.0.id" in exc_info.value.detail
        assert "missing" in exc_info.value.detail

    def test_not_json(self) -> None:
        with pytest.raises(CatalogDecodingError) as exc_info:
            decode_card_list(b"<html>oops</html>")
        assert exc_info.value.snippet == "<html>oops</html>"


class TestDecodeEditionList:
    def test_edition_name_falls_back_to_code(self) -> None:
        data = json.dumps({"editions": [{"edition": "hitster-nl", "file": "hitster-nl.csv"}]}).encode()
        [edition] = decode_edition_list(data)
        assert edition.edition_name == "hitster-nl"
        assert edition.identifier == ""
        assert edition.card_count == 0
        assert edition.language_short == "de"

    def test_full_edition(self) -> None:
        data = json.dumps(
            {
                "editions": [
                    {
                        "edition": "hitster-de-aaaa0007",
                        "edition_name": "Guilty Pleasures",
                        "language_short": "de",
                        "language_long": "Deutsch",
                        "identifier": "aaaa0007",
                        "file": "hitster-de-aaaa0007.csv",
                        "card_count": 300,
                    }
                ]
            }
        ).encode()
        [edition] = decode_edition_list(data)
        assert edition.edition_name == "Guilty Pleasures"
        assert edition.identifier == "aaaa0007"
        assert edition.card_count == 300

    def test_missing_file(self) -> None:
        with pytest.raises(CatalogDecodingError):
            decode_edition_list(b'{"editions": [{"edition": "hitster-de"}]}')


class TestDecodeMappingResponse:
    def test_top_level_apple_wins(self) -> None:
        data = json.dumps(
            {
                "message": "ok",
                "apple": {"id": "top", "uri": "apple:top"},
                "card": {"id": "1", "title": "T", "artist": "A", "year": "2000", "apple": {"id": "c", "uri": "u"}},
            }
        ).encode()
        assert decode_mapping_response(data).apple_mapping() == ("top", "apple:top")

    def test_falls_back_to_card_apple(self) -> None:
        data = json.dumps(
            {"card": {"id": "1", "title": "T", "artist": "A", "year": "2000", "apple": {"id": "c", "uri": "u"}}}
        ).encode()
        assert decode_mapping_response(data).apple_mapping() == ("c", "u")

    def test_incomplete_pair_is_missing(self) -> None:
        data = json.dumps({"message": "no match", "apple": {"id": "only-id"}}).encode()
        result = decode_mapping_response(data)
        assert result.apple_mapping() is None
        assert result.message == "no match"


class TestDecodeRegistrationResponse:
    def test_camel_case_keys(self) -> None:
        data = json.dumps({"apiKey": "k-1", "status": "new", "deviceId": "DEV"}).encode()
        registration = decode_registration_response(data)
        assert registration.api_key == "k-1"
        assert registration.device_id == "DEV"

    def test_empty_api_key_rejected(self) -> None:
        with pytest.raises(CatalogDecodingError):
            decode_registration_response(b'{"apiKey": ""}')


class TestBodySnippet:
    def test_empty(self) -> None:
        assert body_snippet(b"") == ""

    def test_non_utf8(self) -> None:
        assert body_snippet(b"\xff\xfe\xfd") == "<non-utf8>"

    def test_truncated(self) -> None:
        snippet = body_snippet(b"x" * (BODY_SNIPPET_MAX_CHARS + 100))
        assert snippet.endswith("...(truncated)")
        assert len(snippet) == BODY_SNIPPET_MAX_CHARS + len("...(truncated)")
