"""Catalog cache models: Card, Edition."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from mucajey.db.base import Base, utc_now


class Card(Base):
    """A cached game card.

    ``card_id`` is only unique within an edition; editions reuse identifiers.
    """

    __tablename__ = "cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    card_id: Mapped[str] = mapped_column(String(100), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    artist: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    year: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    edition: Mapped[str] = mapped_column(String(255), nullable=False)
    language_short: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    language_long: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    # Streaming references
    apple_id: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    apple_uri: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    spotify_id: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    spotify_uri: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    spotify_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)

    __table_args__ = (
        UniqueConstraint("edition", "card_id", name="uq_cards_edition_card_id"),
        Index("ix_cards_year", "year"),
    )

    @property
    def has_apple_mapping(self) -> bool:
        return bool(self.apple_id) and bool(self.apple_uri)


class Edition(Base):
    """A cached game edition.

    The base edition of a language has an empty ``identifier``.
    """

    __tablename__ = "editions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    edition: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    edition_name: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    language_short: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    language_long: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    identifier: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    file: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    card_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)

    __table_args__ = (Index("ix_editions_language_identifier", "language_short", "identifier"),)
