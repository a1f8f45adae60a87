"""Sync service configuration loaded from environment variables."""

import functools

from pydantic_settings import BaseSettings

from mucajey import __version__
from mucajey.catalog.constants import DEFAULT_API_BASE_URL, DEFAULT_REQUEST_TIMEOUT
from mucajey.config.constants import DEFAULT_APP_NAME, DEFAULT_CLIENT_PLATFORM, DEFAULT_LOG_LEVEL


class SyncSettings(BaseSettings):
    """Catalog sync configuration."""

    # Remote catalog
    API_BASE_URL: str = DEFAULT_API_BASE_URL
    REQUEST_TIMEOUT_SECONDS: float = DEFAULT_REQUEST_TIMEOUT

    # Registration payload
    APP_NAME: str = DEFAULT_APP_NAME
    APP_VERSION: str = __version__
    CLIENT_PLATFORM: str = DEFAULT_CLIENT_PLATFORM

    # Device identity
    DEVICE_VENDOR_ID: str = ""  # Empty = random identifier on first launch

    # Secure storage (Fernet key)
    CREDENTIAL_ENCRYPTION_KEY: str = ""

    # Logging
    LOG_LEVEL: str = DEFAULT_LOG_LEVEL

    model_config = {"env_prefix": ""}


@functools.lru_cache(maxsize=1)
def get_settings() -> SyncSettings:
    """Return cached sync settings singleton."""
    return SyncSettings()
