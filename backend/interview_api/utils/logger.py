"""
Structured logging. Model output is only ever logged as short previews.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Optional

from interview_api.config import Settings, get_settings

TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra=``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """One JSON object per line: level, logger, message, plus any ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def build_handler(settings: Settings, stream: Optional[IO[str]] = None) -> logging.Handler:
    """JSON lines in production, pipe-separated text elsewhere."""
    handler = logging.StreamHandler(stream or sys.stdout)
    if settings.environment == "production":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    return handler


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Set the root level and attach a handler unless one is already installed."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level)
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        root.addHandler(build_handler(settings))
    # httpx logs every OpenAI request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def preview(text: str | None, limit: int = 200) -> str:
    """Single-line head of ``text`` for log messages."""
    if not text:
        return ""
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[:limit] + "..."
