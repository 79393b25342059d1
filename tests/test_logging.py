"""Tests for structured logging helpers."""

import json
import logging

import pytest

from qrgen.logging import (
    AUDIT,
    ROOT_LOGGER,
    ConsoleFormatter,
    JsonFormatter,
    audit,
    get_logger,
    setup_logging,
    trace,
)


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured():
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG)
    handler = ListHandler()
    root.addHandler(handler)
    yield handler.records
    root.removeHandler(handler)


def test_get_logger_namespace():
    assert get_logger("cli").name == "qrgen.cli"


def test_audit_record(captured):
    audit("thing.happened", logger=get_logger("test"), count=3)
    record = captured[-1]
    assert record.levelno == AUDIT
    assert record.levelname == "AUDIT"
    assert record.event == "thing.happened"
    assert record.ctx == {"count": 3}


def test_json_formatter(captured):
    audit("render.written", logger=get_logger("test"), path="qr.svg")
    entry = json.loads(JsonFormatter().format(captured[-1]))
    assert entry["level"] == "AUDIT"
    assert entry["src"] == "qrgen.test"
    assert entry["event"] == "render.written"
    assert entry["ctx"] == {"path": "qr.svg"}
    assert entry["ts"].endswith("Z")


def test_console_formatter_plain_message(captured):
    get_logger("test").warning("careful %s", "now")
    line = ConsoleFormatter(use_color=False).format(captured[-1])
    assert "WARNING" in line
    assert "[qrgen.test]" in line
    assert line.endswith("careful now")


def test_trace_success(captured):
    @trace(logger_name="test")
    def add(a, b):
        return a + b

    assert add(2, b=3) == 5
    events = [r.event for r in captured]
    assert events == ["add.enter", "add.done"]
    assert captured[-1].ctx == {"result": "5"}
    assert captured[-1].duration_ms >= 0


def test_trace_error(captured):
    @trace(logger_name="test")
    def boom():
        raise RuntimeError("nope")

    with pytest.raises(RuntimeError):
        boom()
    record = captured[-1]
    assert record.event == "boom.error"
    assert record.levelno == logging.ERROR
    assert record.exc_info[0] is RuntimeError


def test_setup_logging_env_level(monkeypatch, tmp_path):
    monkeypatch.setenv("QRGEN_LOG_LEVEL", "warning")
    root = setup_logging(log_file=str(tmp_path / "log.jsonl"))
    assert root.level == logging.WARNING
    assert len(root.handlers) == 2


def test_setup_logging_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("QRGEN_LOG_LEVEL", "ERROR")
    assert setup_logging(level="DEBUG").level == logging.DEBUG
    assert setup_logging(level="audit").level == AUDIT
    assert setup_logging(level="bogus").level == logging.INFO
