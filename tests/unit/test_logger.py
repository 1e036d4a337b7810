"""Tests for logging setup."""

from __future__ import annotations

import json
import logging

import pytest

from invoicepatch.core.config import AppSettings
from invoicepatch.core.logger import JsonFormatter, init_logging


@pytest.fixture
def bare_root():
    root = logging.getLogger()
    saved_level = root.level
    yield root
    for handler in [h for h in root.handlers if isinstance(h.formatter, JsonFormatter)]:
        root.removeHandler(handler)
    root.setLevel(saved_level)


def test_json_formatter_includes_extra():
    record = logging.makeLogRecord(
        {"name": "invoicepatch.test", "levelname": "INFO", "msg": "saved %s",
         "args": ("c-1",), "contractor_id": "c-1"}
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "saved c-1"
    assert payload["logger"] == "invoicepatch.test"
    assert payload["extra"] == {"contractor_id": "c-1"}


def test_init_logging_installs_one_handler(bare_root):
    for handler in bare_root.handlers[:]:
        bare_root.removeHandler(handler)
    settings = AppSettings(log_format="json", log_level="debug")
    init_logging(settings)
    init_logging(settings)
    assert len(bare_root.handlers) == 1
    assert isinstance(bare_root.handlers[0].formatter, JsonFormatter)
    assert bare_root.level == logging.DEBUG
