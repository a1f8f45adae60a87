"""Cache database package -- convenience re-exports.

Importing this module registers all models with Base.metadata.
"""

from mucajey.db.base import Base
from mucajey.db.enums import SyncResource
from mucajey.db.models import Card, Edition, Preference, SecureItem, SyncStatusRecord
from mucajey.db.session import DatabaseManager

__all__ = [
    # Base
    "Base",
    # Enums
    "SyncResource",
    # Models
    "Card",
    "Edition",
    "Preference",
    "SecureItem",
    "SyncStatusRecord",
    # Session
    "DatabaseManager",
]
