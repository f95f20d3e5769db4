"""Structured Logging — JSON records for decode failures and registry changes.

Invariants:
    - Records carry timestamp, level, logger name and message
    - Codec fields (error_code, tag, size) and registry fields (role, code, count) are
      copied from `extra` when present
    - Only the `envex` logger is configured; the host application's root logger is untouched

Design Decisions:
    - setup_logging() returns the handler it installed so bootstrap can install it once
    - text format kept for local debugging of wire traffic; json is the default
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = ("error_code", "tag", "code", "role", "size", "count")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure the `envex` logger; returns the installed handler."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    logger = logging.getLogger("envex")
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
