"""Scanned-code lookup."""

from mucajey.lookup.exceptions import CardNotFoundError, InvalidScanFormatError, MappingMissingDataError, ScanError
from mucajey.lookup.resolver import LookupResolver
from mucajey.lookup.scan import ScanKey, parse_scan

__all__ = [
    "CardNotFoundError",
    "InvalidScanFormatError",
    "LookupResolver",
    "MappingMissingDataError",
    "ScanError",
    "ScanKey",
    "parse_scan",
]
