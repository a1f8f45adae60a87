"""Catalog API client, payload models and decoder."""

from mucajey.catalog.client import CatalogClient
from mucajey.catalog.exceptions import (
    CatalogDecodingError,
    CatalogError,
    CredentialStorageError,
    InvalidResponseError,
    InvalidURLError,
    ServerError,
)

__all__ = [
    "CatalogClient",
    "CatalogDecodingError",
    "CatalogError",
    "CredentialStorageError",
    "InvalidResponseError",
    "InvalidURLError",
    "ServerError",
]
