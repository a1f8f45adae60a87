"""Catalog API async client."""

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx

from mucajey.catalog.constants import (
    API_KEY_HEADER,
    CARD_MAP_PATH,
    CARDS_PATH,
    DEFAULT_API_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT,
    EDITIONS_PATH,
)
from mucajey.catalog.exceptions import (
    CatalogDecodingError,
    CatalogError,
    InvalidURLError,
    ServerError,
    body_snippet,
)

if TYPE_CHECKING:
    from mucajey.credentials import CredentialProvisioner

logger = logging.getLogger(__name__)


def build_url(base_url: str, path: str) -> str:
    """Join a base URL and an absolute path, validating the result.

    Raises:
        InvalidURLError: If the result is not an absolute http(s) URL.
    """
    raw = f"{base_url.rstrip('/')}{path}"
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        raise InvalidURLError(raw) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidURLError(raw)
    return raw


class CatalogClient:
    """Async client for the catalog API.

    Every call resolves an API key through the injected provisioner first and
    sends it as the ``X-API-Key`` header. Failures are raised immediately;
    there is no retry or backoff.
    """

    def __init__(
        self,
        provisioner: "CredentialProvisioner",
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self._provisioner = provisioner
        self._base_url = base_url
        self._request_timeout = request_timeout

    async def _api_key(self) -> str:
        """Return an API key, registering the device if necessary.

        Raises:
            ServerError: If no key could be obtained. The original failure
                is chained as ``__cause__``.
        """
        try:
            return await self._provisioner.register_and_get_api_key()
        except (CatalogError, httpx.TransportError) as exc:
            logger.error("Could not obtain API key: %s", exc)
            raise ServerError(detail="API key unavailable") from exc

    async def _request(self, method: str, path: str, *, label: str) -> bytes:
        """Send an authenticated request and return the raw body.

        1. Build and validate the URL
        2. Resolve the API key
        3. Send the request
        4. Non-2xx: raise ServerError
        5. Empty 2xx body: raise CatalogDecodingError
        """
        url = build_url(self._base_url, path)
        api_key = await self._api_key()

        logger.info("%s %s", method, url)
        async with httpx.AsyncClient(timeout=self._request_timeout) as client:
            response = await client.request(method, url, headers={API_KEY_HEADER: api_key})

        data = response.content
        logger.debug(
            "Response (%s): status=%d, content-type=%s, bytes=%d",
            label,
            response.status_code,
            response.headers.get("Content-Type", "<none>"),
            len(data),
        )

        if not 200 <= response.status_code < 300:
            snippet = body_snippet(data)
            logger.error("Server error: HTTP %d for %s", response.status_code, label)
            raise ServerError(status_code=response.status_code, detail=snippet)

        if not data:
            logger.error("Empty response body for %s", label)
            raise CatalogDecodingError(f"{label}: empty response body")

        logger.debug("Body snippet (%s): %s", label, body_snippet(data))
        return data

    # -------------------------------------------------------------------
    # Public API methods
    # -------------------------------------------------------------------

    async def get_all_editions(self) -> bytes:
        """GET /edition/all."""
        return await self._request("GET", EDITIONS_PATH, label=EDITIONS_PATH)

    async def get_all_cards(self) -> bytes:
        """GET /card/all."""
        return await self._request("GET", CARDS_PATH, label=CARDS_PATH)

    async def map_card_to_track(self, edition: str, card_id: str) -> bytes:
        """POST /card/{edition}/{card_id}/apple/search.

        Triggers the server-side Apple Music lookup for one card.
        """
        path = CARD_MAP_PATH.format(edition=quote(edition, safe=""), card_id=quote(card_id, safe=""))
        return await self._request("POST", path, label=path)
