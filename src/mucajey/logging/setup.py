"""Structured logging configuration."""

import logging
import sys

from mucajey.logging.formatter import JSONLogFormatter


def configure_logging(level: str = "INFO", service: str = "mucajey") -> None:
    """Route every log record to stdout as JSON.

    Replaces any handlers already installed on the root logger, so calling it
    twice does not duplicate output.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONLogFormatter(service=service))
    root.addHandler(handler)
