"""JSON log output for the command-line tools."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# attributes passed through ``extra=`` that end up in the JSON line
CONTEXT_FIELDS = ("entry_point", "event_name", "measurement_id")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"))


def get_logger(name: str = "gawire", level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` with exactly one JSON stderr handler attached."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
    return logger
