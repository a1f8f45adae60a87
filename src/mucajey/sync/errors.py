"""Translate sync and lookup failures into user-displayable messages."""

import httpx
from sqlalchemy.exc import SQLAlchemyError

from mucajey.catalog.exceptions import (
    CatalogDecodingError,
    CredentialStorageError,
    InvalidResponseError,
    InvalidURLError,
    ServerError,
)
from mucajey.lookup.exceptions import CardNotFoundError, InvalidScanFormatError, MappingMissingDataError

NO_CONNECTION_MESSAGE = "No internet connection. Cached data is still available."
TIMEOUT_MESSAGE = "The server did not respond in time."
NETWORK_MESSAGE = "Network error while contacting the server."
INVALID_URL_MESSAGE = "Invalid server URL."
INVALID_RESPONSE_MESSAGE = "Invalid server response."
DECODING_MESSAGE = "The server data could not be processed."
CREDENTIAL_STORAGE_MESSAGE = "The API key could not be saved."
CACHE_WRITE_MESSAGE = "The local cache could not be updated."
INVALID_SCAN_MESSAGE = "This code is not a valid game card."
CARD_NOT_FOUND_MESSAGE = "Card not found. Sync the catalog and try again."
MAPPING_MISSING_MESSAGE = "No Apple Music match for this card."

# Checked in order; the first matching type wins.
_MESSAGES: tuple[tuple[type[BaseException], str], ...] = (
    (httpx.ConnectError, NO_CONNECTION_MESSAGE),
    (httpx.TimeoutException, TIMEOUT_MESSAGE),
    (httpx.TransportError, NETWORK_MESSAGE),
    (CatalogDecodingError, DECODING_MESSAGE),
    (InvalidURLError, INVALID_URL_MESSAGE),
    (InvalidResponseError, INVALID_RESPONSE_MESSAGE),
    (CredentialStorageError, CREDENTIAL_STORAGE_MESSAGE),
    (SQLAlchemyError, CACHE_WRITE_MESSAGE),
    (InvalidScanFormatError, INVALID_SCAN_MESSAGE),
    (CardNotFoundError, CARD_NOT_FOUND_MESSAGE),
    (MappingMissingDataError, MAPPING_MISSING_MESSAGE),
)


def classify_error(exc: BaseException) -> str:
    """Return a short message describing ``exc`` for display.

    A ``ServerError`` without a status code (no API key could be obtained) is
    classified by its chained cause, so a missing connection during device
    registration still reads as a connectivity problem.
    """
    if isinstance(exc, ServerError):
        if exc.status_code is not None:
            return f"Server error (HTTP {exc.status_code})."
        if exc.__cause__ is not None:
            return classify_error(exc.__cause__)
        return "Server error."

    for exc_type, message in _MESSAGES:
        if isinstance(exc, exc_type):
            return message
    return f"Unexpected error: {exc}"[:500]
