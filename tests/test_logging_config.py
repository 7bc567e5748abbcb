"""Tests for logging setup."""

import json
import logging
import sys

from pv_simulator.logging_config import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        name="pv_simulator.test", level=logging.INFO, pathname=__file__,
        lineno=1, msg="Simulated %s", args=("R1",), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_basic_fields(self):
        entry = json.loads(JSONFormatter().format(_record()))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "pv_simulator.test"
        assert entry["message"] == "Simulated R1"
        assert "timestamp" in entry
        assert "modelo" not in entry

    def test_extra_fields(self):
        entry = json.loads(JSONFormatter().format(
            _record(modelo="sdm", referencia="R1", duration_ms=1.5)
        ))
        assert entry["modelo"] == "sdm"
        assert entry["referencia"] == "R1"
        assert entry["duration_ms"] == 1.5

    def test_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()
        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in entry["exception"]


class TestSetupLogging:
    def test_plain_text(self, restore_root_logger):
        setup_logging(level="debug", json_format=False)
        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_json(self, restore_root_logger):
        setup_logging(level="WARNING", json_format=True)
        root = restore_root_logger
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_repeated_setup_does_not_duplicate(self, restore_root_logger):
        setup_logging(level="INFO", json_format=False)
        setup_logging(level="INFO", json_format=False)
        assert len(restore_root_logger.handlers) == 1
