"""Stdout logging setup: plain text or one JSON object per line."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from invoicepatch.core.config import AppSettings

_RESERVED = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RESERVED:
                continue
            payload.setdefault("extra", {})[key] = value
        return json.dumps(payload, default=str)


def init_logging(settings: AppSettings | None = None) -> None:
    """Install a single stdout handler on the root logger. Idempotent."""
    root = logging.getLogger()
    if root.handlers:
        return
    if settings is None:
        settings = AppSettings()
    handler = logging.StreamHandler(sys.stdout)
    if settings.log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    root.addHandler(handler)
