"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp (when the event was recorded, UTC), level,
      logger name, and message
    - Warnings and errors carry their source location (module:lineno)
    - Exceptions are logged with their type name next to the traceback
    - Extra fields (method, path, status_code, error_code...) surfaced when present
    - JSON format in production, human-readable otherwise
    - setup_logging is idempotent: it replaces the handler it installed before

Design Decisions:
    - JSONFormatter on top of stdlib logging: no extra dependency
    - setup_logging called once on startup via lifespan
"""

import logging
import json
from datetime import datetime, timezone


EXTRA_FIELDS = (
    "method", "path", "status_code", "duration_ms", "client",
    "error_code", "user_id", "port",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.levelno >= logging.WARNING:
            log["location"] = f"{record.module}:{record.lineno}"
        if record.exc_info:
            log["exception_type"] = record.exc_info[0].__name__
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


_installed_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure logging for the application."""
    global _installed_handler
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    if _installed_handler is not None:
        logging.root.removeHandler(_installed_handler)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _installed_handler = handler
    return handler
