"""Structured JSON logging configuration.

Configures Python logging to emit JSON-formatted log entries with required
fields: request_id, level, timestamp. The request ID comes from the record or,
failing that, from the ID bound by ``RequestIdMiddleware`` for the current
request. Query fields are added contextually (endpoint_name, http_status,
duration_ms, failure_kind, error_reason, retry_attempts).

SECURITY: Never logs credential values, Authorization headers, or query bodies.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import IO

from sparql_gateway.middleware.request_id import request_id_var


# Patterns that should be redacted from log output
_SENSITIVE_PATTERNS = re.compile(
    r"(password|secret|token|credential|authorization|basic)"
    r"[\s]*[=:]\s*\S+",
    re.IGNORECASE,
)

# Contextual fields copied from ``extra`` when present
_CONTEXT_FIELDS = (
    "endpoint_name",
    "http_status",
    "duration_ms",
    "failure_kind",
    "query_length",
    "retry_attempts",
)


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON with structured fields.

    Each entry contains at minimum: request_id, level, timestamp, message.
    Additional fields can be attached via the ``extra`` dict on log calls.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self._sanitize(record.getMessage()),
            "request_id": getattr(record, "request_id", None) or request_id_var.get(),
        }

        for name in _CONTEXT_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if hasattr(record, "error_reason"):
            entry["error_reason"] = self._sanitize(
                str(getattr(record, "error_reason"))
            )

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self._sanitize(
                self.formatException(record.exc_info)
            )

        return json.dumps(entry, default=str)

    @staticmethod
    def _sanitize(text: str) -> str:
        """Remove sensitive values from log text."""
        return _SENSITIVE_PATTERNS.sub("[REDACTED]", text)


# httpx logs every outbound request line at INFO, endpoint URL included.
_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO", stream: IO[str] | None = None) -> logging.Handler:
    """Route all records through a single JSON handler on the root logger.

    Unknown level names fall back to INFO. Returns the installed handler.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    resolved = logging.getLevelName(level.upper())
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
