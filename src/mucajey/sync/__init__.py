"""Catalog sync orchestration."""

from mucajey.sync.errors import classify_error
from mucajey.sync.service import CatalogSyncService, SyncListener
from mucajey.sync.state import ResourceSyncState, SyncPhase

__all__ = [
    "CatalogSyncService",
    "ResourceSyncState",
    "SyncListener",
    "SyncPhase",
    "classify_error",
]
