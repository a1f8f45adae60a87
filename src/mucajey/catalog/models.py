"""Pydantic models for catalog API payloads.

Wire models mirror the JSON returned by the catalog API (snake_case keys, most
fields optional). Domain records (``CardData``, ``EditionData``) carry the
flattened, defaulted values that the cache stores.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_LANGUAGE_SHORT = "de"
DEFAULT_LANGUAGE_LONG = "Deutsch"
UNKNOWN_EDITION = "Unknown"

# ---------------------------------------------------------------------------
# Streaming service references
# ---------------------------------------------------------------------------


class AppleRef(BaseModel):
    """Apple Music reference embedded in card payloads."""

    id: str | None = None
    uri: str | None = None


class SpotifyRef(BaseModel):
    """Spotify reference embedded in card payloads."""

    id: str | None = None
    uri: str | None = None
    url: str | None = None


# ---------------------------------------------------------------------------
# Domain records
# ---------------------------------------------------------------------------


class CardData(BaseModel):
    """A decoded card, ready to be written to the cache."""

    model_config = ConfigDict(frozen=True)

    card_id: str
    title: str
    artist: str
    year: str
    edition: str = UNKNOWN_EDITION
    language_short: str = DEFAULT_LANGUAGE_SHORT
    language_long: str = DEFAULT_LANGUAGE_LONG
    apple_id: str = ""
    apple_uri: str = ""
    spotify_id: str = ""
    spotify_uri: str = ""
    spotify_url: str = ""


class EditionData(BaseModel):
    """A decoded edition, ready to be written to the cache."""

    model_config = ConfigDict(frozen=True)

    edition: str
    edition_name: str
    language_short: str = DEFAULT_LANGUAGE_SHORT
    language_long: str = DEFAULT_LANGUAGE_LONG
    identifier: str = ""
    file: str
    card_count: int = 0


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------


class CardPayload(BaseModel):
    """Card object from ``/card/all`` and the mapping endpoint."""

    id: str
    title: str
    artist: str
    year: str
    edition: str | None = None
    edition_name: str | None = None
    edition_file: str | None = None
    language_short: str | None = None
    language_long: str | None = None
    source_file: str | None = None
    apple: AppleRef | None = None
    spotify: SpotifyRef | None = None

    def to_card(self) -> CardData:
        apple = self.apple or AppleRef()
        spotify = self.spotify or SpotifyRef()
        return CardData(
            card_id=self.id,
            title=self.title,
            artist=self.artist,
            year=self.year,
            edition=self.edition or UNKNOWN_EDITION,
            language_short=self.language_short or DEFAULT_LANGUAGE_SHORT,
            language_long=self.language_long or DEFAULT_LANGUAGE_LONG,
            apple_id=apple.id or "",
            apple_uri=apple.uri or "",
            spotify_id=spotify.id or "",
            spotify_uri=spotify.uri or "",
            spotify_url=spotify.url or "",
        )


class CardListResponse(BaseModel):
    """Envelope returned by ``GET /card/all``."""

    cards: list[CardPayload] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Editions
# ---------------------------------------------------------------------------


class EditionPayload(BaseModel):
    """Edition object from ``/edition/all``."""

    edition: str
    edition_name: str | None = None
    language_short: str | None = None
    language_long: str | None = None
    identifier: str | None = None
    file: str
    card_count: int | None = None

    def to_edition(self) -> EditionData:
        return EditionData(
            edition=self.edition,
            edition_name=self.edition_name or self.edition,
            language_short=self.language_short or DEFAULT_LANGUAGE_SHORT,
            language_long=self.language_long or DEFAULT_LANGUAGE_LONG,
            identifier=self.identifier or "",
            file=self.file,
            card_count=self.card_count or 0,
        )


class EditionListResponse(BaseModel):
    """Envelope returned by ``GET /edition/all``."""

    editions: list[EditionPayload] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Track mapping
# ---------------------------------------------------------------------------


class MappingResult(BaseModel):
    """Response of ``POST /card/{edition}/{id}/apple/search``."""

    message: str | None = None
    card: CardPayload | None = None
    apple: AppleRef | None = None

    def apple_mapping(self) -> tuple[str, str] | None:
        """Return ``(apple_id, apple_uri)`` when the response carries both.

        The top-level ``apple`` object wins; the embedded card's ``apple``
        object is the fallback.
        """
        for ref in (self.apple, self.card.apple if self.card else None):
            if ref is not None and ref.id and ref.uri:
                return ref.id, ref.uri
        return None


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class RegistrationRequest(BaseModel):
    """Body of ``POST /api/register``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    app_name: str
    app_version: str
    device_id: str
    platform: str


class RegistrationResponse(BaseModel):
    """Registration result; ``status`` is ``new`` or ``existing``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    api_key: str = Field(min_length=1)
    message: str | None = None
    app_name: str | None = None
    device_id: str | None = None
    created_at: str | None = None
    registered_at: str | None = None
    status: str | None = None
