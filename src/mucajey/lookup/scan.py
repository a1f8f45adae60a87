"""Parse scanned card codes into cache lookup keys."""

from dataclasses import dataclass
from urllib.parse import urlsplit

from mucajey.lookup.exceptions import InvalidScanFormatError

EDITION_PREFIX = "hitster"


@dataclass(frozen=True)
class ScanKey:
    """Cache lookup key derived from a scanned code."""

    language: str
    card_id: str
    edition_identifier: str = ""

    @property
    def edition(self) -> str:
        """Synthesized edition code: ``hitster-<lang>`` or ``hitster-<lang>-<identifier>``."""
        if self.edition_identifier:
            return f"{EDITION_PREFIX}-{self.language}-{self.edition_identifier}"
        return f"{EDITION_PREFIX}-{self.language}"

    @property
    def is_base_edition(self) -> bool:
        return not self.edition_identifier


def normalize_payload(payload: str) -> str:
    """Prefix ``https://`` unless the payload already names an http(s) scheme."""
    stripped = payload.strip()
    if stripped.lower().startswith(("http://", "https://")):
        return stripped
    return f"https://{stripped}"


def parse_scan(payload: str) -> ScanKey:
    """Parse a scanned payload.

    Expected paths::

        /de/00073             -> language "de", card "00073" (base edition)
        /de/aaaa0007/00073    -> language "de", edition "aaaa0007", card "00073"

    Raises:
        InvalidScanFormatError: If the payload is not a URL or the path does
            not have two or three segments.
    """
    try:
        parts = urlsplit(normalize_payload(payload))
    except ValueError as exc:
        raise InvalidScanFormatError(payload, "not a URL") from exc
    if not parts.netloc:
        raise InvalidScanFormatError(payload, "not a URL")

    segments = [segment for segment in parts.path.split("/") if segment]
    if len(segments) == 2:
        language, card_id = segments
        return ScanKey(language=language, card_id=card_id)
    if len(segments) == 3:
        language, identifier, card_id = segments
        return ScanKey(language=language, card_id=card_id, edition_identifier=identifier)
    raise InvalidScanFormatError(payload, f"expected 2 or 3 path segments, got {len(segments)}")
