"""Configuration defaults."""

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///mucajey.db"
DEFAULT_BUSY_TIMEOUT_SECONDS = 30.0

DEFAULT_APP_NAME = "mucajey"
DEFAULT_CLIENT_PLATFORM = "python"
DEFAULT_LOG_LEVEL = "INFO"
