"""JSON log formatter for structured logging output."""

import json
import logging
from datetime import UTC, datetime

# ``extra=`` attributes copied into the JSON entry when a record carries them.
CONTEXT_FIELDS = ("resource", "edition", "card_id")


class JSONLogFormatter(logging.Formatter):
    """Render each record as one line of JSON.

    Example::

        {"timestamp": "2024-05-01T12:00:00.123000+00:00", "level": "INFO",
         "service": "mucajey", "logger": "mucajey.sync.service",
         "message": "cards sync completed: 300 items", "resource": "cards"}
    """

    def __init__(self, service: str = "mucajey") -> None:
        super().__init__()
        self._service = service

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "service": self._service,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value:
                entry[field] = str(value)

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
