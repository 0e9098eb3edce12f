"""Tests for structured logging."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from tallybook.config import BaseConfig
from tallybook.logging_config import JSONFormatter, get_logger, setup_logging


@pytest.fixture
def config(monkeypatch, tmp_path):
    monkeypatch.setenv("TALLYBOOK_DATA_DIR", str(tmp_path))
    cfg = BaseConfig()
    yield cfg
    root = logging.getLogger("tallybook")
    for handler in list(root.handlers):
        handler.close()
    root.handlers.clear()


def _record(**kwargs):
    record = logging.LogRecord(
        name="tallybook.test",
        level=kwargs.pop("level", logging.INFO),
        pathname="test.py",
        lineno=42,
        msg=kwargs.pop("msg", "Test message"),
        args=(),
        exc_info=kwargs.pop("exc_info", None),
    )
    record.module = "test_module"
    record.funcName = "test_function"
    for key, value in kwargs.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "tallybook.test"
    assert log_data["message"] == "Test message"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_keeps_extras():
    log_data = json.loads(JSONFormatter().format(_record(time_range="month", count=3)))
    assert log_data["extra"] == {"time_range": "month", "count": 3}


def test_json_formatter_with_exception():
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record(level=logging.ERROR, exc_info=exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"]


def test_setup_logging(config, tmp_path):
    config.DEV_MODE = True
    logger = setup_logging(config)

    assert logger.name == "tallybook"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2  # console + file

    log_file = tmp_path / "logs" / "tallybook.log"
    assert log_file.exists()

    logger.warning("Test warning message")
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    assert len(lines) >= 2
    entries = [json.loads(line) for line in lines]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["message"] == "Test warning message"


def test_setup_logging_twice_does_not_duplicate_handlers(config):
    setup_logging(config)
    logger = setup_logging(config)
    assert len(logger.handlers) == 2


def test_get_logger():
    assert get_logger("module1").name == "tallybook.module1"
    assert get_logger("tallybook.services.aggregates").name == "tallybook.services.aggregates"
    assert get_logger("module1") is not get_logger("module2")


@pytest.mark.parametrize("dev_mode", [True, False])
def test_console_level_follows_dev_mode(config, dev_mode):
    config.DEV_MODE = dev_mode
    logger = setup_logging(config)

    console = [
        h
        for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(console) == 1
    assert console[0].level == (logging.INFO if dev_mode else logging.WARNING)
