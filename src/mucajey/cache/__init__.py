"""Local catalog cache."""

from mucajey.cache.store import CatalogCacheStore

__all__ = ["CatalogCacheStore"]
