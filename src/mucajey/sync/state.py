"""In-memory sync state exposed to observers."""

import enum
from dataclasses import dataclass
from datetime import UTC, datetime


class SyncPhase(enum.StrEnum):
    """Per-resource sync state machine: IDLE -> SYNCING -> IDLE."""

    IDLE = "idle"
    SYNCING = "syncing"


@dataclass(frozen=True)
class ResourceSyncState:
    """Snapshot of one resource's sync state."""

    phase: SyncPhase = SyncPhase.IDLE
    last_sync: datetime | None = None
    error: str | None = None
    has_data: bool = False

    @property
    def is_syncing(self) -> bool:
        return self.phase is SyncPhase.SYNCING

    @property
    def needs_first_sync(self) -> bool:
        """True while there is nothing cached to show yet."""
        return not self.has_data


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from SQLite."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
