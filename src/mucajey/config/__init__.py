"""Configuration."""

from mucajey.config.constants import DEFAULT_DATABASE_URL
from mucajey.config.database import DatabaseSettings
from mucajey.config.settings import SyncSettings, get_settings

__all__ = [
    "DEFAULT_DATABASE_URL",
    "DatabaseSettings",
    "SyncSettings",
    "get_settings",
]
