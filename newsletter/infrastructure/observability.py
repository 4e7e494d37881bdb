"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Correlation fields (request_id, username, user_id, subscriber_id, ...)
      surfaced when present in `extra`; non-JSON values (UUIDs) rendered with str()
    - JSON format in production, human-readable in development
    - Passwords, tokens and API keys are never passed as extra fields

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan; calling it again replaces
      the handler instead of stacking a second one
"""

import logging
import json
from datetime import datetime, timezone

CORRELATION_FIELDS = (
    "request_id", "username", "user_id", "subscriber_id",
    "error_code", "operation", "recipient", "path",
)

# SQL echo would log bound parameters (emails, hashes)
QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore")

_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CORRELATION_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    global _handler
    if _handler is not None:
        logging.root.removeHandler(_handler)

    _handler = logging.StreamHandler()
    if fmt == "json":
        _handler.setFormatter(JSONFormatter())
    else:
        _handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(request_id)s: %(message)s",
            defaults={"request_id": "-"},
        ))
    logging.root.addHandler(_handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
