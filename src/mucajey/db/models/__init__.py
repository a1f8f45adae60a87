"""Re-export all model classes."""

from mucajey.db.models.catalog import Card, Edition
from mucajey.db.models.credentials import Preference, SecureItem
from mucajey.db.models.operations import SyncStatusRecord

__all__ = [
    "Card",
    "Edition",
    "Preference",
    "SecureItem",
    "SyncStatusRecord",
]
