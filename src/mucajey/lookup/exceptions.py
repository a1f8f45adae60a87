"""Scan lookup exceptions."""


class ScanError(Exception):
    """Base exception for scanned-code resolution errors."""


class InvalidScanFormatError(ScanError):
    """The scanned payload is not a ``/<lang>/<id>`` or ``/<lang>/<edition>/<id>`` URL."""

    def __init__(self, payload: str, reason: str = "") -> None:
        self.payload = payload
        msg = f"Invalid card code: {payload!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class CardNotFoundError(ScanError):
    """No cached card matches the scanned ``(edition, card_id)``."""

    def __init__(self, edition: str, card_id: str) -> None:
        self.edition = edition
        self.card_id = card_id
        super().__init__(f"Card {card_id} not found in edition {edition}")


class MappingMissingDataError(ScanError):
    """The mapping response carried no complete Apple Music id/uri pair."""

    def __init__(self, edition: str, card_id: str) -> None:
        self.edition = edition
        self.card_id = card_id
        super().__init__(f"No Apple Music match returned for card {edition}/{card_id}")
