"""Logging setup for resend-sync.

Modules log through children of the ``resend_sync`` logger, using a short event
name as the message (``resend_list_page``) and structured fields in ``extra``.
One stream handler renders records as a JSON object per line or as plain text.

Level and format normally come from ``ResendConfig.log_level`` and
``ResendConfig.log_format``. At package import, before any config is loaded,
RESEND_LOG_LEVEL and RESEND_LOG_FORMAT are read straight from the environment.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Optional

LOGGER_NAMESPACE = "resend_sync"
HANDLER_NAME = "resend_sync.stream"
REDACTED = "[REDACTED]"

# Substrings of an extra key that mark its value as a credential
SENSITIVE_MARKERS = (
    "api_key",
    "apikey",
    "authorization",
    "bearer",
    "credential",
    "password",
    "secret",
    "token",
)

# Attributes present on every LogRecord; anything else arrived through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
}


def is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in SENSITIVE_MARKERS)


def record_context(record: logging.LogRecord) -> dict:
    """Collect the ``extra`` fields of a record, redacting credentials."""
    return {
        key: REDACTED if is_sensitive(key) else value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class StructuredFormatter(logging.Formatter):
    """Render each record as one JSON line.

    Keys: ``timestamp`` (UTC, ``Z`` suffix, taken from the record's creation
    time), ``level``, ``logger``, ``message``, then ``context`` when the record
    carries extras and ``exception`` when it carries a traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry = {
            "timestamp": created.isoformat(timespec="milliseconds").replace(
                "+00:00", "Z"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = record_context(record)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Single-line output for local runs, extras appended as ``key=value``."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{line} {pairs}"


FORMATTERS = {"json": StructuredFormatter, "text": TextFormatter}


def configure_logging(
    level: Optional[str] = None, log_format: Optional[str] = None
) -> None:
    """Apply a level and output format to the resend_sync logger tree.

    Safe to call repeatedly. The first call installs the package's stream
    handler; later calls swap its level and formatter, so a CLI can reapply
    settings once ``ResendConfig`` has been loaded from ``.env``.

    Args:
        level: Level name such as ``DEBUG``. Falls back to RESEND_LOG_LEVEL,
            then INFO. Unknown names resolve to INFO.
        log_format: ``json`` or ``text``. Falls back to RESEND_LOG_FORMAT,
            then json.

    Example:
        >>> config = get_config()
        >>> configure_logging(config.log_level, config.log_format)
    """
    level = (level or os.getenv("RESEND_LOG_LEVEL") or "INFO").upper()
    log_format = (log_format or os.getenv("RESEND_LOG_FORMAT") or "json").lower()

    level_no = logging.getLevelName(level)
    if not isinstance(level_no, int):
        level_no = logging.INFO

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level_no)
    logger.propagate = False

    handler = next((h for h in logger.handlers if h.get_name() == HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)

    handler.setFormatter(FORMATTERS.get(log_format, StructuredFormatter)())
