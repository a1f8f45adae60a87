"""Credential provisioning for the device id and API key.

The device id lives in the plain ``preferences`` table. The API key is
Fernet-encrypted into ``secure_items`` and is never rotated automatically.
"""

import asyncio
import logging
import uuid

import httpx
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from mucajey.catalog.client import build_url
from mucajey.catalog.constants import REGISTER_PATH
from mucajey.catalog.decoder import decode_registration_response
from mucajey.catalog.exceptions import (
    CatalogDecodingError,
    CredentialStorageError,
    InvalidResponseError,
    ServerError,
    body_snippet,
)
from mucajey.catalog.models import RegistrationRequest
from mucajey.config.settings import SyncSettings
from mucajey.crypto import SecretEncryptor
from mucajey.db.models.credentials import Preference, SecureItem
from mucajey.db.session import DatabaseManager

logger = logging.getLogger(__name__)

API_KEY_ACCOUNT = "mucajeyAPIKey"
DEVICE_ID_KEY = "mucajeyDeviceId"


class CredentialProvisioner:
    """Obtains and persists the device-scoped API key that gates catalog calls.

    Registration happens at most once: after a key has been stored, every
    call is answered from secure storage without touching the network.
    Concurrent callers share a lock so only one registration request is sent.
    """

    def __init__(
        self,
        settings: SyncSettings,
        db: DatabaseManager,
        *,
        vendor_id: str | None = None,
    ) -> None:
        self._settings = settings
        self._db = db
        self._vendor_id = vendor_id or settings.DEVICE_VENDOR_ID or None
        self._registration_lock = asyncio.Lock()
        self._device_lock = asyncio.Lock()

    def _encryptor(self) -> SecretEncryptor:
        """Build the encryptor; raises ValueError if the key is missing or malformed."""
        return SecretEncryptor(self._settings.CREDENTIAL_ENCRYPTION_KEY)

    async def get_device_id(self) -> str:
        """Return the persisted device id, generating it on first use.

        The vendor id is preferred; a random upper-case UUID is the fallback.
        """
        async with self._device_lock:
            async with self._db.session() as session:
                result = await session.execute(select(Preference).where(Preference.key == DEVICE_ID_KEY))
                preference = result.scalar_one_or_none()
                if preference is not None:
                    return preference.value

                device_id = self._vendor_id or str(uuid.uuid4()).upper()
                session.add(Preference(key=DEVICE_ID_KEY, value=device_id))
            logger.info("Generated device id %s", device_id)
            return device_id

    async def get_api_key(self) -> str | None:
        """Return the stored API key, or None if absent or unreadable."""
        try:
            async with self._db.session() as session:
                result = await session.execute(
                    select(SecureItem.encrypted_value).where(SecureItem.account == API_KEY_ACCOUNT)
                )
                ciphertext = result.scalar_one_or_none()
        except SQLAlchemyError:
            logger.exception("Could not read API key from secure storage")
            return None

        if ciphertext is None:
            return None

        try:
            encryptor = self._encryptor()
        except ValueError:
            logger.warning("No usable credential encryption key configured")
            return None

        api_key = encryptor.decrypt_or_none(ciphertext)
        if api_key is None:
            logger.warning("Stored API key could not be decrypted")
        return api_key

    async def register_and_get_api_key(self) -> str:
        """Return the stored API key, registering the device if there is none.

        Raises:
            InvalidURLError: If the registration URL cannot be built.
            InvalidResponseError: If the response body is empty or undecodable.
            ServerError: If the server answers with a status other than 200/201.
            CredentialStorageError: If the key cannot be persisted.
        """
        async with self._registration_lock:
            existing = await self.get_api_key()
            if existing:
                logger.debug("API key loaded from secure storage: %s...", existing[:16])
                return existing
            return await self._register()

    async def _register(self) -> str:
        url = build_url(self._settings.API_BASE_URL, REGISTER_PATH)
        payload = RegistrationRequest(
            app_name=self._settings.APP_NAME,
            app_version=self._settings.APP_VERSION,
            device_id=await self.get_device_id(),
            platform=self._settings.CLIENT_PLATFORM,
        )

        logger.info("Registering device: POST %s", url)
        async with httpx.AsyncClient(timeout=self._settings.REQUEST_TIMEOUT_SECONDS) as client:
            response = await client.post(url, json=payload.model_dump(by_alias=True))
        logger.info("Registration response: HTTP %d", response.status_code)

        if response.status_code not in (200, 201):
            snippet = body_snippet(response.content)
            logger.error("Registration failed: HTTP %d %s", response.status_code, snippet)
            raise ServerError(status_code=response.status_code, detail=snippet)

        if not response.content:
            raise InvalidResponseError("Empty registration response")

        try:
            registration = decode_registration_response(response.content)
        except CatalogDecodingError as exc:
            raise InvalidResponseError(str(exc)) from exc

        await self._save_api_key(registration.api_key)
        logger.info(
            "API key stored: %s... (status: %s)",
            registration.api_key[:16],
            registration.status or "unknown",
        )
        return registration.api_key

    async def _save_api_key(self, api_key: str) -> None:
        """Replace the stored API key in a single transaction."""
        try:
            ciphertext = self._encryptor().encrypt(api_key)
        except ValueError as exc:
            raise CredentialStorageError("Credential encryption key is missing or invalid") from exc

        try:
            async with self._db.session() as session:
                await session.execute(delete(SecureItem).where(SecureItem.account == API_KEY_ACCOUNT))
                session.add(SecureItem(account=API_KEY_ACCOUNT, encrypted_value=ciphertext))
        except SQLAlchemyError as exc:
            raise CredentialStorageError("Could not write API key to secure storage") from exc
