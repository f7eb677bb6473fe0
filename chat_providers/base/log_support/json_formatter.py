"""JSON logging formatter used by the shared ``chat_providers`` logger.

Records whose message is itself a JSON object (as produced by
``log_event``) are hoisted into the top-level document so lines are not
double-encoded. Exception info is rendered into an ``exc`` field.
"""
from __future__ import annotations

import contextlib
import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# LogRecord attributes that are logging internals rather than payload.
_RESERVED = frozenset(
    {
        "msg", "args", "levelname", "levelno", "name", "pathname", "filename",
        "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
        "created", "msecs", "relativeCreated", "thread", "threadName",
        "processName", "process", "taskName", "message",
    }
)


class JsonFormatter(logging.Formatter):
    """Serialize a record to one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        doc = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        text = record.getMessage()
        parsed = None
        with contextlib.suppress(ValueError):
            parsed = json.loads(text)
        if isinstance(parsed, dict):
            doc.update(parsed)
        else:
            doc["msg"] = text
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RESERVED or key in doc:
                continue
            doc[key] = value
        if record.exc_info:
            doc["exc"] = self.formatException(record.exc_info)
        return json.dumps(doc, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
