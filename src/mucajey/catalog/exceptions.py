"""Catalog API and credential exceptions."""

from mucajey.catalog.constants import BODY_SNIPPET_MAX_CHARS


def body_snippet(data: bytes, max_chars: int = BODY_SNIPPET_MAX_CHARS) -> str:
    """Return a bounded, printable snippet of a response body."""
    if not data:
        return ""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return "<non-utf8>"
    if len(text) > max_chars:
        return text[:max_chars] + "...(truncated)"
    return text


class CatalogError(Exception):
    """Base exception for catalog client and credential errors."""


class InvalidURLError(CatalogError):
    """An endpoint URL could not be constructed from the configured base URL."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Invalid server URL: {url!r}")


class InvalidResponseError(CatalogError):
    """The server response was empty or could not be decoded."""


class ServerError(CatalogError):
    """The server returned a non-success status, or no API key could be obtained."""

    def __init__(self, status_code: int | None = None, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        msg = "Catalog server error"
        if status_code is not None:
            msg += f": HTTP {status_code}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class CatalogDecodingError(CatalogError):
    """A payload did not match the expected shape."""

    def __init__(self, detail: str, snippet: str = "") -> None:
        self.detail = detail
        self.snippet = snippet
        super().__init__(f"Could not decode catalog response: {detail}")


class CredentialStorageError(CatalogError):
    """The API key could not be written to secure storage."""
