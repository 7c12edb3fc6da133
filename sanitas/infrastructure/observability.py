"""Structured Logging — JSON formatter and setup for handler observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (request_id, endpoint, error_code, ...) surfaced when present
    - JSON format in deployed handlers, human-readable in development

Design Decisions:
    - setup_logging is idempotent: Lambda containers reuse the module between
      invocations and must not stack handlers
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "request_id", "endpoint", "method", "path",
    "error_code", "status_code", "row_count",
)

_configured = False


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    global _configured
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if _configured:
        return
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    _configured = True


def request_extra(request_id: str | None, endpoint: str, **fields) -> dict:
    """Build the `extra` dict attached to every log line of one request."""
    extra = {"request_id": request_id, "endpoint": endpoint}
    extra.update(fields)
    return extra
