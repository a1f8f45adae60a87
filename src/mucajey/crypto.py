"""Fernet encryption for secrets kept in the local cache database."""

from cryptography.fernet import Fernet, InvalidToken


class SecretEncryptor:
    """Symmetric encryption for values stored in ``secure_items``.

    Ciphertext is URL-safe base64 text, so it fits a plain ``Text`` column.
    A missing or malformed key is rejected at construction with ``ValueError``.
    """

    def __init__(self, key: str) -> None:
        if not key:
            raise ValueError("Encryption key is empty")
        self._fernet = Fernet(key.encode())

    @staticmethod
    def generate_key() -> str:
        return Fernet.generate_key().decode()

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode()).decode()

    def decrypt(self, ciphertext: str) -> str:
        """Raises ``InvalidToken`` if the ciphertext was not produced with this key."""
        return self._fernet.decrypt(ciphertext.encode()).decode()

    def decrypt_or_none(self, ciphertext: str) -> str | None:
        try:
            return self.decrypt(ciphertext)
        except InvalidToken:
            return None
