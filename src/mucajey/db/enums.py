"""Cache enums."""

import enum


class SyncResource(enum.StrEnum):
    """Catalog collections that are synced independently."""

    CARDS = "cards"
    EDITIONS = "editions"
