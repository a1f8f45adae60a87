"""Cache database settings."""

from pydantic_settings import BaseSettings

from mucajey.config.constants import DEFAULT_BUSY_TIMEOUT_SECONDS, DEFAULT_DATABASE_URL


class DatabaseSettings(BaseSettings):
    """Where the local cache lives and how the engine connects to it.

    ``busy_timeout_seconds`` only applies to SQLite: a writer waits this long
    for the file lock held by another transaction before failing.
    """

    database_url: str = DEFAULT_DATABASE_URL
    echo: bool = False
    use_null_pool: bool = True
    pool_pre_ping: bool = True
    busy_timeout_seconds: float = DEFAULT_BUSY_TIMEOUT_SECONDS

    model_config = {"env_prefix": ""}
