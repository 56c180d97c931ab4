"""Structured Logging — JSON formatter and setup for the guestbook API.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (message_id, actor, error_code, ...) surfaced when present
    - Tokens and passwords are never passed as extras
    - username is attached only to successful admin logins; a failed attempt
      is logged without it (it may hold a mistyped password)
    - setup_logging() owns exactly one root handler: calling it again
      replaces that handler instead of stacking another

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency, full control
    - setup_logging called on startup via lifespan
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "error_code", "path", "method", "status_code",
    "message_id", "actor", "evicted", "username",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per record; EXTRA_FIELDS copied when set."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class _GuestbookHandler(logging.StreamHandler):
    """Marker type so setup_logging can find the handler it installed."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the guestbook root handler, replacing a previous one."""
    for existing in list(logging.root.handlers):
        if isinstance(existing, _GuestbookHandler):
            logging.root.removeHandler(existing)

    handler = _GuestbookHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
