"""Structured logging: JSON formatter and setup."""

from mucajey.logging.formatter import JSONLogFormatter
from mucajey.logging.setup import configure_logging

__all__ = ["JSONLogFormatter", "configure_logging"]
